"""Edit workflow contracts: validation results, child summaries and protocols."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from pagesmith.core.nodes import Node
    from pagesmith.editing.actions import EditMode

FormData = typ.Mapping[str, str]


@dc.dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of checking submitted form data. Returned, never raised."""

    valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def ok(cls) -> ValidationResult:
        """Return a passing result."""
        return cls(valid=True)

    @classmethod
    def invalid(cls, *errors: str) -> ValidationResult:
        """Return a failing result carrying ``errors``.

        Raises
        ------
        ValueError
            If no error message is given.
        """
        if not errors:
            msg = "At least one error message is required for an invalid result."
            raise ValueError(msg)
        return cls(valid=False, errors=tuple(errors))

    @classmethod
    def from_errors(cls, errors: cabc.Iterable[str]) -> ValidationResult:
        """Return :meth:`ok` for no errors, otherwise :meth:`invalid`."""
        collected = tuple(errors)
        return cls.invalid(*collected) if collected else cls.ok()

    def errors_as_string(self, separator: str = ", ") -> str:
        """Join the error messages with ``separator``."""
        return separator.join(self.errors)

    def __bool__(self) -> bool:
        return self.valid


@dc.dataclass(frozen=True, slots=True)
class EditableChild:
    """Summary of one nested item shown in an edit modal."""

    id: str
    label: str
    summary: str | None = None


@typ.runtime_checkable
class Editable(typ.Protocol):
    """A module that can render an edit form and apply submitted values."""

    def build_edit_view(self) -> Node:
        """Return the form fields describing the current state."""
        ...

    def validate(self, form: FormData) -> ValidationResult:
        """Check ``form`` without changing state."""
        ...

    def apply_edits(self, form: FormData) -> typ.Any:
        """Update state from ``form`` and rebuild."""
        ...

    def editable_children(self) -> list[EditableChild]:
        """Return nested items editable on their own."""
        ...


class AuthorizationChecker(typ.Protocol):
    """Permission source queried by the editing overlay."""

    def can_edit(self, module_id: str, user_id: str) -> bool: ...

    def can_delete(self, module_id: str, user_id: str) -> bool: ...

    def edit_mode(self, module_id: str, user_id: str) -> EditMode | None: ...


__all__ = [
    "AuthorizationChecker",
    "Editable",
    "EditableChild",
    "FormData",
    "ValidationResult",
]
