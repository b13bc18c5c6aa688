"""Load overlay settings and page layouts from YAML."""

from __future__ import annotations

import typing as typ

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from pagesmith.core.nodes import validate_dom_id
from pagesmith.editing.actions import EditMode
from pagesmith.errors import ConfigurationError

from .models import ModuleLayout, OverlayConfig, PageLayout, RowLayout

if typ.TYPE_CHECKING:
    from pathlib import Path

_OVERLAY_STRING_FIELDS = (
    "edit_label",
    "delete_label",
    "add_module_label",
    "edit_target",
    "edit_url_pattern",
    "delete_url_pattern",
    "add_module_url_pattern",
    "insert_row_url_pattern",
)


def load_overlay_config(path: Path) -> OverlayConfig:
    """Read the ``overlay`` block of ``path``.

    A file without an ``overlay`` block yields the defaults, so a page layout
    file can be passed here directly.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ConfigurationError
        If the YAML cannot be parsed or a value has the wrong shape.
    """
    raw = _read_mapping(path)
    payload = raw.get("overlay") or {}
    if not isinstance(payload, dict):
        msg = f"'overlay' in '{path}' must be a mapping."
        raise ConfigurationError(msg)

    config = OverlayConfig()
    for field in _OVERLAY_STRING_FIELDS:
        if field in payload:
            value = _optional_str(payload[field])
            if value is None:
                msg = f"overlay.{field} must not be empty."
                raise ConfigurationError(msg)
            setattr(config, field, value)
    config.delete_confirm = _optional_str(payload.get("delete_confirm"))
    if "max_modules_per_row" in payload:
        config.max_modules_per_row = _positive_int(
            payload["max_modules_per_row"], "overlay.max_modules_per_row"
        )
    if "edit_mode" in payload:
        config.edit_mode = _parse_edit_mode(payload["edit_mode"])
    return config


def load_page_layout(path: Path) -> PageLayout:
    """Read the ``page`` block of ``path`` into a :class:`PageLayout`.

    Examples
    --------
    >>> from pathlib import Path
    >>> layout = load_page_layout(Path("page.yaml"))  # doctest: +SKIP
    >>> [row.id for row in layout.rows]  # doctest: +SKIP
    ['intro', 'details']
    """
    raw = _read_mapping(path)
    payload = raw.get("page")
    if not isinstance(payload, dict):
        msg = f"No 'page' mapping defined in '{path}'."
        raise ConfigurationError(msg)

    page_id = _required_id(payload.get("id"), "page.id")
    title = _optional_str(payload.get("title")) or page_id.replace("-", " ").title()
    rows_raw = payload.get("rows") or []
    if not isinstance(rows_raw, list):
        msg = "page.rows must be a list."
        raise ConfigurationError(msg)

    rows = [_build_row(index, entry) for index, entry in enumerate(rows_raw)]
    return PageLayout(
        id=page_id,
        title=title,
        rows=rows,
        description=_optional_str(payload.get("description")),
    )


def _build_row(index: int, payload: object) -> RowLayout:
    if not isinstance(payload, dict):
        msg = f"page.rows[{index}] must be a mapping."
        raise ConfigurationError(msg)
    row_id = _required_id(payload.get("id"), f"page.rows[{index}].id")
    max_modules = payload.get("max_modules")
    modules_raw = payload.get("modules") or []
    if not isinstance(modules_raw, list):
        msg = f"page.rows[{index}].modules must be a list."
        raise ConfigurationError(msg)
    modules: list[ModuleLayout] = []
    for position, entry in enumerate(modules_raw):
        where = f"page.rows[{index}].modules[{position}]"
        match entry:
            case dict():
                modules.append(
                    ModuleLayout(
                        id=_required_id(entry.get("id"), f"{where}.id"),
                        title=_optional_str(entry.get("title")),
                        content=str(entry.get("content") or ""),
                        markdown=bool(entry.get("markdown", True)),
                    )
                )
            case _:
                msg = f"{where} must be a mapping."
                raise ConfigurationError(msg)
    return RowLayout(
        id=row_id,
        modules=modules,
        max_modules=None
        if max_modules is None
        else _positive_int(max_modules, f"page.rows[{index}].max_modules"),
    )


def _read_mapping(path: Path) -> dict[str, typ.Any]:
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    try:
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
    except YAMLError as exc:
        msg = f"Could not parse '{path}': {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise ConfigurationError(msg)
    return dict(loaded)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _required_id(value: object | None, where: str) -> str:
    text = _optional_str(value)
    if text is None:
        msg = f"{where} is required."
        raise ConfigurationError(msg)
    return validate_dom_id(text)


def _positive_int(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{where} must be a positive integer. Got: {value!r}"
        raise ConfigurationError(msg)
    return value


def _parse_edit_mode(value: object | None) -> EditMode | None:
    text = _optional_str(value)
    if text is None or text.lower() == "none":
        return None
    try:
        return EditMode[text.upper()]
    except KeyError as exc:
        choices = ", ".join(mode.name for mode in EditMode)
        msg = f"overlay.edit_mode must be one of {choices} or none. Got: {text!r}"
        raise ConfigurationError(msg) from exc


__all__ = ["load_overlay_config", "load_page_layout"]
