"""Common literal values used across styleguide_pages.

These constants keep filenames and configuration keys centralized so the
builder, scaffold, and tests can import the same values without drifting.
Intended for internal use within the styleguide_pages package.

Examples
--------
>>> from styleguide_pages import _constants
>>> _constants.HEADER_CANDIDATES[0]
'_header.html'
>>> _constants.page_file_name("Base CSS")
'base_css.html'
"""

CONFIG_FILENAME = "styleguide_config.yml"
HEADER_CANDIDATES = ("_header.html", "header.html")
FOOTER_CANDIDATES = ("_footer.html", "footer.html")
RESERVED_ASSET_PREFIX = "_"
INDEX_FILENAME = "index.html"
NAV_LEVELS = ("page", "section", "all")
DEFAULT_NAV_LEVEL = "page"
LOGGER_NAME = "styleguide_pages"


def page_file_name(category: str) -> str:
    """Return the output file name used for ``category``."""
    return category.replace(" ", "_").lower() + ".html"
