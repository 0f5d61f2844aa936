"""
Idea-Verse Configuration
Central configuration for paths, layout constants, and settings.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = PROJECT_ROOT / "data"

# Idea store settings
STORE_BACKEND = os.getenv("IDEA_VERSE_STORE_BACKEND", "json")
IDEA_STORE_PATH = Path(os.getenv("IDEA_VERSE_STORE", str(DATA_DIR / "ideas.json")))
SEED_IDEAS_PATH = DATA_DIR / "seed_ideas.csv"
DEFAULT_OWNER_ID = os.getenv("IDEA_VERSE_OWNER", "local-user")

LOG_LEVEL = os.getenv("IDEA_VERSE_LOG_LEVEL", "INFO")

# Keyword vocabulary (closed set, at most 7 values)
AVAILABLE_KEYWORDS = (
    "Technology",
    "Innovation",
    "Data",
    "Design",
    "Business",
    "Research",
    "Development",
)
MAX_KEYWORDS_PER_IDEA = 2
DEFAULT_GROUP = "ungrouped"

# Design tokens for keyword tags (cycled by keyword hash)
TAG_COLORS = {
    "red": "#ff4848",
    "orange": "#ffae2b",
    "yellow": "#ffff06",
    "skyblue": "#0de7ff",
    "violet": "#8a38f5",
    "green": "#77ff00",
    "blue": "#0d52ff",
}
TAG_PALETTE = tuple(TAG_COLORS.values())
FALLBACK_KEYWORD_COLOR = "#666666"

# Connection thresholds
SAME_KEYWORD_THRESHOLD = 0.15
CROSS_KEYWORD_THRESHOLD = 0.20
WEAK_TIE_THRESHOLD = 0.25  # same-keyword edges below this are dotted

# Node size tiers by connection count
BIG_NODE_MIN_CONNECTIONS = 3
MID_NODE_MIN_CONNECTIONS = 2

# Group placement (golden-angle spiral on a sphere)
GROUP_SPHERE_RADIUS = 1400.0
GROUP_HEIGHT_SCALE = 0.6

# Node placement inside a group box
NODE_SPREAD_BASE = 150.0
NODE_SPREAD_PER_MEMBER = 110.0  # scaled by sqrt(member count)
NODE_MIN_DISTANCE = 250.0
SHARED_NODE_MIN_DISTANCE = 350.0
DETACHED_NODE_MIN_DISTANCE = 150.0
DETACHED_NODE_SPREAD = 120.0
MAX_PLACEMENT_ATTEMPTS = 100
PERTURB_ANGLE_STEP = 0.35  # radians added per attempt
PERTURB_RADIUS_STEP = 0.06  # relative radius growth per attempt

# Group bounding boxes
BOX_PADDING = 120.0
BOX_SAFETY_MARGIN = 40.0
MIN_BOX_HALF_EXTENT = 200.0
MIN_BOX_HALF_EXTENT_PER_MEMBER = 40.0
INTERSECTION_PADDING = 100.0

# Camera / projection
FOCAL_LENGTH = 2000.0
PERSPECTIVE_MIN = 0.2
PERSPECTIVE_MAX = 3.0
DEFAULT_PITCH = -15.0
DEFAULT_YAW = 25.0
DEFAULT_ROLL = 0.0

# Interaction
ROTATE_SENSITIVITY = 0.4  # degrees per pixel of drag
WHEEL_ZOOM_SENSITIVITY = 0.001  # scale change per wheel delta unit
WHEEL_ZOOM_RANGE = (0.3, 2.0)
BUTTON_ZOOM_STEP = 0.2
BUTTON_ZOOM_RANGE = (0.5, 3.0)
FLOAT_AMPLITUDE = 4.0  # pixels
FLOAT_SPEED = 0.05  # radians per frame
FLOAT_PHASE_STEP = 0.37  # radians per unit of id hash
ANIMATION_INTERVAL_SECONDS = 0.5

# Scene rendering
EDGE_CURVE_RATIO = 0.15
NODE_RADIUS = {"small": 6.0, "mid": 9.0, "big": 13.0}
EDGE_WIDTH = {"small": 1.0, "mid": 1.8, "big": 2.6}
LABEL_MAX_CHARS = 24
CROSS_EDGE_COLOR = "#b3b3b3"

# Visualization settings
PLOT_HEIGHT = 700
PLOT_WIDTH = 1000

# Related ideas panel
DEFAULT_K_RELATED = 5
