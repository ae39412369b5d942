"""Common literal values shared by the exporter and the filter engine.

The rendered page and ``static/timeline.js`` only agree through these class
names, ids and attribute names, so templates, generators, filters and tests
import the same values instead of repeating them.

Examples
--------
>>> from timeline_pages import _constants
>>> _constants.ENTRY_SELECTOR
'.timeline-entry'
>>> sorted(_constants.POSITION_CLASSES)
['even', 'first', 'odd']
"""

ENTRY_CLASS = "timeline-entry"
ENTRY_SELECTOR = f".{ENTRY_CLASS}"
CATEGORY_ATTRIBUTE = "data-category"
FILTER_NAME = "filter"
ALL_FILTER_ID = "all"

FIRST_CLASS = "first"
ODD_CLASS = "odd"
EVEN_CLASS = "even"
POSITION_CLASSES = frozenset({FIRST_CLASS, ODD_CLASS, EVEN_CLASS})

PROP_DATE = "DATE"
PROP_CATEGORY = "DATA-CATEGORY"
PROP_ICON_COLOR = "ICON-COLOR"
PROP_ICON_GLYPH = "FA-ICON"
PROP_IMAGE_SRC = "IMAGE-SRC"
PROP_IMAGE_CAPTION = "IMAGE-CAPTION"

SCRIPT_ASSET = "timeline.js"
