"""Common literal values used across component_pages.

These constants keep the reference syntax, directory names, and output
conventions centralized so the scanner, expander, compiler, and tests import
the same values without drifting.

Examples
--------
>>> from component_pages import _constants
>>> _constants.component_tag("nav")
'<app-nav/>'
>>> _constants.INDEX_FILENAME
'index.html'
"""

COMPONENT_PREFIX = "app-"
COMPONENT_SUFFIX = ".html"
COMPONENTS_DIRNAME = "components"
INDEX_FILENAME = "index.html"
INDENT = "    "
TEMP_SUFFIX = ".tmp"
DEFAULT_OUTPUT_DIRNAME = "output"
DEFAULT_CONFIG_FILENAME = "components.yaml"


def component_tag(name: str) -> str:
    """Return the self-closing reference literal for component ``name``."""
    return f"<{COMPONENT_PREFIX}{name}/>"
