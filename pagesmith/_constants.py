"""Common literal values used across pagesmith.

These constants keep placeholder formats, validation grammars and default
overlay wiring centralized so nodes, the editing overlay and tests import the
same values without drifting. Intended for internal use within the pagesmith
package.

Examples
--------
>>> from pagesmith import _constants
>>> _constants.SLOT_PLACEHOLDER_TEMPLATE.format(name="title")
'{{SLOT:title}}'
>>> bool(_constants.DOM_ID_PATTERN.match("edit-modal-container"))
True
"""

import re

SLOT_PLACEHOLDER_TEMPLATE = "{{{{SLOT:{name}}}}}"
COMPONENT_PLACEHOLDER_TEMPLATE = "{{{{COMPONENT:{name}}}}}"
DOM_ID_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_-]*$")
CSS_UNIT_PATTERN = re.compile(
    r"^(auto|0|\d+(\.\d+)?(px|%|em|rem|vw|vh|vmin|vmax|ch))$"
)

GRID_COLUMNS = 12
DEFAULT_MAX_MODULES_PER_ROW = 3

EDIT_MODE_PARAM = "editMode"
MODAL_CONTAINER_ID = "edit-modal-container"
PAGE_CONTAINER_ID = "page-content"
