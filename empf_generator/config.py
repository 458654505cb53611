"""
Shared configuration and constants.
"""

# Standard Library
import dataclasses


SCHEMA_VERSION = "5.3.0"

# internal (E1) units per millimeter
E1_UNITS_PER_MM = 1000.0

# images land one unit short of rects without this shift
IMAGE_PLACEMENT_CORRECTION = 1

DEFAULT_PROJECT_NAME = "Untitled Design"
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_LAYER_NAME = "Image Layer"
DEFAULT_LAYER_COUNT = 1

FONT_MAPPING_PATH = "Asset/font/font_mapping.json"
CANVAS_PATH_TEMPLATE = "Asset/project_file/canvas_{canvas_id}.json"
PROJECT_INFO_PATH = "Metadata/project_info.json"

CANVAS_DOCUMENT_ID = "canvas"
CUSTOM_IMAGE_TYPE = "customImage"

# unverified against the desktop application, kept here for schema checks
LOCK_FIELD = "_lockCus"
SKIP_PRINT_FIELD = "_skipPrintCus"
LOCKED_IMAGE_OVERRIDES = {
	"selectable": False,
}

SUPPORTED_MIME_TYPES = {
	"PNG": "image/png",
	"JPEG": "image/jpeg",
	# camera JPEGs carrying extra frames
	"MPO": "image/jpeg",
	"WEBP": "image/webp",
}

PRINT_MODEL = 2
PRINT_IMAGE_QUALITY = 300
PROJECT_DIR_ID = 261
PROJECT_TYPE = 1

# fields the consuming application writes on every image object
IMAGE_COSMETIC_DEFAULTS = {
	"fill": "rgb(0,0,0)",
	"stroke": None,
	"strokeWidth": 0,
	"strokeDashArray": None,
	"strokeLineCap": "butt",
	"strokeDashOffset": 0,
	"strokeLineJoin": "miter",
	"strokeUniform": False,
	"strokeMiterLimit": 4,
	"shadow": None,
	"backgroundColor": "",
	"fillRule": "nonzero",
	"paintFirst": "fill",
	"globalCompositeOperation": "source-over",
	"skewX": 0,
	"skewY": 0,
	"cropX": 0,
	"cropY": 0,
	"selectable": True,
	"hasControls": True,
	"evented": True,
	"crossOrigin": None,
	"filters": [],
}

CANVAS_EXTRA = {
	"cutData": "",
	"appCavas": "",
	"pcCavas": "",
	"canvasShape": None,
	"bleedingLine": None,
}


@dataclasses.dataclass
class GeneratorConfig:
	print_bed: str = "standardFlatbed"
	project_name: str = DEFAULT_PROJECT_NAME
	# accepted, not yet written to the canvas document
	background_color: str = DEFAULT_BACKGROUND_COLOR
