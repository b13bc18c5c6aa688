"""Editing overlay: controls, forms, dialogs and permission hooks.

The overlay decorates rendered content with buttons that carry ``hx-*``
action descriptors. Servers answer those requests with fragments built from
the same node tree, typically an :class:`EditModalBuilder` dialog populated
from a module's :meth:`~Editable.build_edit_view`.

Examples
--------
>>> from pagesmith.editing import EditableRow
>>> from pagesmith.modules import ContentModule
>>> row = EditableRow("intro", "home")
>>> row.add_module(ContentModule(title="One", content="a"), "one")
>>> row.add_module(ContentModule(title="Two", content="b"), "two")
>>> row.column_widths()
[6, 6]
"""

from __future__ import annotations

from .actions import ActionDescriptor, EditMode, Verb, append_query_param, with_edit_mode
from .auth import (
    require,
    require_for_create,
    require_for_delete,
    require_for_edit,
    unauthorized_modal,
)
from .forms import (
    FieldKind,
    FieldSpec,
    checkbox_field,
    form_from_fields,
    text_area_field,
    text_field,
)
from .modal import EditModalBuilder
from .module import EditableModule
from .page import EditablePage
from .row import EditableRow, column_width
from .validation import (
    AuthorizationChecker,
    Editable,
    EditableChild,
    FormData,
    ValidationResult,
)

__all__ = [
    "ActionDescriptor",
    "AuthorizationChecker",
    "EditMode",
    "EditModalBuilder",
    "Editable",
    "EditableChild",
    "EditableModule",
    "EditablePage",
    "EditableRow",
    "FieldKind",
    "FieldSpec",
    "FormData",
    "ValidationResult",
    "Verb",
    "append_query_param",
    "checkbox_field",
    "column_width",
    "form_from_fields",
    "require",
    "require_for_create",
    "require_for_delete",
    "require_for_edit",
    "text_area_field",
    "text_field",
    "unauthorized_modal",
    "with_edit_mode",
]
