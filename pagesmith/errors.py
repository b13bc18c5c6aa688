"""Exception types raised by pagesmith."""

from __future__ import annotations


class PagesmithError(Exception):
    """Base class for every error raised by the library."""


class ConfigurationError(PagesmithError, ValueError):
    """Raised when a node, overlay or config file is configured with bad input.

    Covers invalid CSS units, DOM ids, column widths, row capacities and
    missing builder fields. Raised at call time, never deferred to render.
    """


class CapacityError(PagesmithError, RuntimeError):
    """Raised when a module is added to a row that is already full."""


__all__ = ["CapacityError", "ConfigurationError", "PagesmithError"]
