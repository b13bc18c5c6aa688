"""Action descriptors consumed by the client-side interactive runtime.

Controls in the editing overlay do nothing by themselves; they carry
``hx-*`` attributes that tell an htmx-style runtime which request to send and
where to put the response. :class:`ActionDescriptor` keeps those values
together and writes them onto a tag.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from pagesmith._constants import EDIT_MODE_PARAM

if typ.TYPE_CHECKING:
    from pagesmith.core.nodes import Tag


class EditMode(enum.Enum):
    """Whether an edit applies immediately or waits for approval."""

    USER_EDIT = "user_edit"
    OWNER_EDIT = "owner_edit"


class Verb(enum.StrEnum):
    """HTTP verbs understood by the runtime."""

    GET = "get"
    POST = "post"
    PUT = "put"
    PATCH = "patch"
    DELETE = "delete"


def append_query_param(url: str, name: str, value: str) -> str:
    """Append ``name=value`` to ``url`` keeping any existing query string.

    Examples
    --------
    >>> append_query_param("/edit", "editMode", "USER_EDIT")
    '/edit?editMode=USER_EDIT'
    >>> append_query_param("/edit?x=1", "editMode", "USER_EDIT")
    '/edit?x=1&editMode=USER_EDIT'
    """
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{name}={value}"


def with_edit_mode(url: str, mode: EditMode | None) -> str:
    """Return ``url`` with ``editMode=<NAME>`` appended when ``mode`` is set."""
    if mode is None:
        return url
    return append_query_param(url, EDIT_MODE_PARAM, mode.name)


@dc.dataclass(frozen=True, slots=True)
class ActionDescriptor:
    """Request a control triggers and how its response is placed.

    Attributes
    ----------
    verb : Verb
        HTTP verb; emitted as ``hx-<verb>``.
    url : str
        Request target.
    target : str, optional
        CSS selector receiving the response (``hx-target``).
    swap : str, optional
        Swap strategy such as ``innerHTML`` or ``outerHTML`` (``hx-swap``).
    confirm : str, optional
        Prompt shown before the request (``hx-confirm``).
    include : str, optional
        Selector of extra inputs sent with the request (``hx-include``).
    """

    verb: Verb
    url: str
    target: str | None = None
    swap: str | None = None
    confirm: str | None = None
    include: str | None = None

    def attributes(self) -> dict[str, str]:
        """Return the ``hx-*`` attributes in emission order."""
        attrs = {f"hx-{self.verb.value}": self.url}
        if self.target:
            attrs["hx-target"] = self.target
        if self.swap:
            attrs["hx-swap"] = self.swap
        if self.confirm:
            attrs["hx-confirm"] = self.confirm
        if self.include:
            attrs["hx-include"] = self.include
        return attrs

    def apply(self, node: Tag) -> Tag:
        """Write the descriptor onto ``node`` and return it."""
        for name, value in self.attributes().items():
            node.set_attribute(name, value)
        return node


__all__ = [
    "ActionDescriptor",
    "EditMode",
    "Verb",
    "append_query_param",
    "with_edit_mode",
]
