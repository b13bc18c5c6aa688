"""Gate edit actions behind an authorization callable."""

from __future__ import annotations

import logging
import typing as typ

from pagesmith.components.elements import AlertStyle, alert, modal

if typ.TYPE_CHECKING:
    import collections.abc as cabc

T = typ.TypeVar("T")

logger = logging.getLogger(__name__)


def unauthorized_modal(message: str) -> str:
    """Render the "Unauthorized" dialog carrying ``message``."""
    return modal("Unauthorized", alert(message, AlertStyle.DANGER)).render()


def require(
    check: cabc.Callable[[], bool],
    action: cabc.Callable[[], T],
    on_denied: cabc.Callable[[], T],
) -> T:
    """Run ``action`` when ``check`` passes, otherwise ``on_denied``."""
    if check():
        return action()
    logger.debug("authorization check %r denied", getattr(check, "__name__", check))
    return on_denied()


def require_for_edit(
    check: cabc.Callable[[], bool],
    action: cabc.Callable[[], str],
    message: str = "Permission denied",
) -> str:
    """Return the edit response, or an unauthorized dialog."""
    return require(check, action, lambda: unauthorized_modal(message))


def require_for_delete(
    check: cabc.Callable[[], bool], action: cabc.Callable[[], str]
) -> str:
    """Return the delete response, or an unauthorized dialog."""
    return require(
        check,
        action,
        lambda: unauthorized_modal("You do not have permission to delete this content"),
    )


def require_for_create(
    check: cabc.Callable[[], bool], action: cabc.Callable[[], str]
) -> str:
    """Return the create response, or an unauthorized dialog."""
    return require(
        check,
        action,
        lambda: unauthorized_modal("You do not have permission to create content"),
    )


__all__ = [
    "require",
    "require_for_create",
    "require_for_delete",
    "require_for_edit",
    "unauthorized_modal",
]
