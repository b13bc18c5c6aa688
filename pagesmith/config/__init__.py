"""Load overlay settings and declarative page layouts from YAML.

A layout file holds a ``page`` block (rows of content modules) and an
optional ``overlay`` block that customizes the editing controls.

Examples
--------
>>> from pathlib import Path
>>> from pagesmith.config import load_overlay_config, load_page_layout
>>> layout = load_page_layout(Path("page.yaml"))  # doctest: +SKIP
>>> overlay = load_overlay_config(Path("page.yaml"))  # doctest: +SKIP
>>> overlay.max_modules_per_row  # doctest: +SKIP
3
"""

from .loader import load_overlay_config, load_page_layout
from .models import ModuleLayout, OverlayConfig, PageLayout, RowLayout

__all__ = [
    "ModuleLayout",
    "OverlayConfig",
    "PageLayout",
    "RowLayout",
    "load_overlay_config",
    "load_page_layout",
]
