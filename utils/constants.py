"""
Constants for the Lanhu UI Builder application.
"""

# Field names of a node object in the design export
FIELD_NAME = "name"
FIELD_TYPE = "type"
FIELD_X = "x"
FIELD_Y = "y"
FIELD_WIDTH = "width"
FIELD_HEIGHT = "height"
FIELD_SOURCE = "source"
FIELD_TEXT = "text"
FIELD_CHILDREN = "children"

# Maximum nesting of nodes below the root accepted by the parser and builder
MAX_DEPTH = 256

# Image fetching
IMAGE_FETCH_TIMEOUT = 10.0  # Seconds per request
IMAGE_FETCH_WORKERS = 4
IMAGE_CACHE_SIZE = 64  # Payloads kept per loader; least recently used are evicted first
IMAGE_POLL_INTERVAL_MS = 50  # How often the UI thread drains finished fetches

# Colors for element rendering, keyed by node kind value
KIND_OUTLINE_COLORS = {
    "group": "#808080",  # Gray
    "image": "#0000FF",  # Blue
    "text": "#000000",   # Black
}
IMAGE_PLACEHOLDER_FILL = "#D3D3D3"  # Light Gray
GROUP_OUTLINE_DASH = (4, 4)
TEXT_FONT = ("TkDefaultFont", 10)

# Application settings
DEFAULT_WINDOW_SIZE = "1200x800"
CANVAS_BG_COLOR = "white"
SELECTED_ELEMENT_COLOR = "red"
SELECTED_ELEMENT_WIDTH = 2
NORMAL_ELEMENT_WIDTH = 1
CANVAS_PADDING = 0.05  # 5% padding for zoom to fit
ZOOM_FACTOR = 1.1  # Zoom in/out factor per mouse wheel tick
