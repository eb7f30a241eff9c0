"""Configuration constants for event layout and preview rendering."""

from reportlab.lib import colors

# Layout thresholds, in hours.
PARALLEL_THRESHOLD = 0.25
NESTED_THRESHOLD = 0.5

# Horizontal budget, in percent of one day column.
INDENT_STEP_PERCENT = 2.5
MIN_WIDTH = 25.0
MARGIN_BETWEEN = 1.0
EDGE_MARGIN_PERCENT = 0.9

# An event at least this long may host staggered parallel neighbours.
EXTENDED_EVENT_HOURS = 1.25
EXTENDED_EVENT_PROGRESS = 0.4

REBALANCE_MAX_ITERATIONS = 5
REBALANCE_MIN_SPREAD = 2

DEFAULT_CONTAINER_WIDTH = 320
DEFAULT_VIEW_TYPE = "week"

# Importance is duration / IMPORTANCE_FULL_HOURS, clamped.
IMPORTANCE_FULL_HOURS = 4.0
IMPORTANCE_MIN = 0.1
IMPORTANCE_MAX = 1.0

# Multi-day segments ending at midnight are drawn up to this hour.
DAY_END_HOUR = 23.99

# Preview page, in points.
PREVIEW_PAGE_WIDTH = 1404
PREVIEW_PAGE_HEIGHT = 1872
PREVIEW_MARGIN = 50
PREVIEW_HEADER_HEIGHT = 120
PREVIEW_LABEL_WIDTH = 42

# File output
DEFAULT_PREVIEW_FILENAME = "dayflow_preview.pdf"

WEEKDAY_LABELS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")


class Theme:
    """Color and font choices for preview rendering."""

    BACKGROUND = colors.HexColor("#F9F9F9")
    TEXT_PRIMARY = colors.HexColor("#2C3E50")
    TEXT_SECONDARY = colors.HexColor("#7F8C8D")

    ACCENT = colors.HexColor("#E67E22")
    GRID_LINES = colors.HexColor("#BDC3C7")
    HALF_HOUR_LINES = colors.HexColor("#EEEEEE")
    EVENT_FILL = colors.HexColor("#D6EAF8")
    EVENT_NESTED_FILL = colors.HexColor("#AED6F1")
    EVENT_BORDER = colors.HexColor("#2E86C1")

    FONT_HEADER = "Helvetica-Bold"
    FONT_REGULAR = "Helvetica"
    FONT_BOLD = "Helvetica-Bold"
