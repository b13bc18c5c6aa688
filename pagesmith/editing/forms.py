"""Labelled form fields used by edit views."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from pagesmith.components.elements import checkbox, div, paragraph, text_area, text_input

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagesmith.core.nodes import Tag


class FieldKind(enum.Enum):
    """Widget used for a declared field."""

    TEXT = "text"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"


@dc.dataclass(frozen=True, slots=True)
class FieldSpec:
    """Declaration of one form field."""

    name: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    value: str | bool | None = None
    rows: int = 5


def text_field(label: str, name: str, value: str | None = None) -> Tag:
    """Return a labelled single-line input."""
    return div(
        paragraph(f"{label}:", classes="form-label"),
        text_input(name, value=value, max_width="100%"),
        classes="form-field",
    )


def text_area_field(label: str, name: str, value: str | None = None, rows: int = 5) -> Tag:
    """Return a labelled multi-line input."""
    return div(
        paragraph(f"{label}:", classes="form-label"),
        text_area(name, value=value, rows=rows, max_width="100%"),
        classes="form-field",
    )


def checkbox_field(label: str, name: str, *, checked: bool = False) -> Tag:
    """Return a checkbox whose submitted value is ``"true"``."""
    return div(checkbox(name, label=label, checked=checked), classes="form-field")


def form_from_fields(fields: cabc.Iterable[FieldSpec]) -> Tag:
    """Render each declared field with the widget matching its kind."""
    form = div(classes="edit-form")
    for field in fields:
        match field.kind:
            case FieldKind.CHECKBOX:
                form.append(checkbox_field(field.label, field.name, checked=bool(field.value)))
            case FieldKind.TEXTAREA:
                form.append(
                    text_area_field(field.label, field.name, _as_text(field.value), field.rows)
                )
            case _:
                form.append(text_field(field.label, field.name, _as_text(field.value)))
    return form


def _as_text(value: str | bool | None) -> str | None:
    return None if value is None else str(value)


__all__ = [
    "FieldKind",
    "FieldSpec",
    "checkbox_field",
    "form_from_fields",
    "text_area_field",
    "text_field",
]
