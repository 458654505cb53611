"""
Conversion of canvas objects into the EMPF JSON documents.

All geometry is held in millimeters until this point and converted to
E1 units here. Converters are registered per CanvasObjectKind; a kind
without a converter fails the export instead of being skipped.
"""

# Standard Library
import base64
import copy
import json
import uuid
from typing import Callable

# local repo modules
import empf_generator as empf
import empf_generator.canvas_objects
import empf_generator.config
import empf_generator.errors
import empf_generator.print_beds
import empf_generator.units


CanvasObjectKind = empf.canvas_objects.CanvasObjectKind
ImageObject = empf.canvas_objects.ImageObject
PrintBedProfile = empf.print_beds.PrintBedProfile
UnsupportedKindError = empf.errors.UnsupportedKindError

SCHEMA_VERSION = empf.config.SCHEMA_VERSION
IMAGE_PLACEMENT_CORRECTION = empf.config.IMAGE_PLACEMENT_CORRECTION
IMAGE_COSMETIC_DEFAULTS = empf.config.IMAGE_COSMETIC_DEFAULTS
CANVAS_DOCUMENT_ID = empf.config.CANVAS_DOCUMENT_ID
CUSTOM_IMAGE_TYPE = empf.config.CUSTOM_IMAGE_TYPE
LOCK_FIELD = empf.config.LOCK_FIELD
SKIP_PRINT_FIELD = empf.config.SKIP_PRINT_FIELD
LOCKED_IMAGE_OVERRIDES = empf.config.LOCKED_IMAGE_OVERRIDES
CANVAS_EXTRA = empf.config.CANVAS_EXTRA
PRINT_MODEL = empf.config.PRINT_MODEL
PRINT_IMAGE_QUALITY = empf.config.PRINT_IMAGE_QUALITY
PROJECT_DIR_ID = empf.config.PROJECT_DIR_ID
PROJECT_TYPE = empf.config.PROJECT_TYPE

mm_to_e1_units = empf.units.mm_to_e1_units
e1_units_to_mm = empf.units.e1_units_to_mm
round_half_away_from_zero = empf.units.round_half_away_from_zero


#============================================
def to_compact_json(document: dict) -> str:
	"""
	Serialize a document without whitespace, keeping non-ASCII text.
	"""
	return json.dumps(document, separators=(",", ":"), ensure_ascii=False)


#============================================
def encode_json(document: dict) -> bytes:
	"""
	Encode a document the way the desktop application stores it.

	Args:
		document: JSON-compatible dict.

	Returns:
		Compact UTF-8 JSON bytes.
	"""
	return to_compact_json(document).encode("utf-8")


#============================================
def build_data_uri(mime_type: str, data: bytes) -> str:
	"""
	Build an inline data URI for image bytes.

	Args:
		mime_type: Image MIME type.
		data: Raw image bytes.

	Returns:
		data: URI string.
	"""
	encoded = base64.b64encode(data).decode("ascii")
	return f"data:{mime_type};base64,{encoded}"


#============================================
def convert_image_object(image_object: ImageObject, profile: PrintBedProfile) -> dict:
	"""
	Convert an image object into a canvas JSON object.

	Args:
		image_object: Resolved ImageObject.
		profile: Active print bed profile.

	Returns:
		Canvas object dict.
	"""
	pixel_width, pixel_height = empf.canvas_objects.probe_pixel_size(image_object.data)
	left = (
		profile.zero_point_x
		- mm_to_e1_units(image_object.x_mm + image_object.width_mm)
		+ IMAGE_PLACEMENT_CORRECTION
	)
	top = (
		profile.zero_point_y
		- mm_to_e1_units(image_object.y_mm + image_object.height_mm)
		+ IMAGE_PLACEMENT_CORRECTION
	)
	converted = {
		"type": CanvasObjectKind.IMAGE.value,
		"version": SCHEMA_VERSION,
		"id": str(uuid.uuid4()),
		"src": build_data_uri(image_object.mime_type, image_object.data),
		"originX": "left",
		"originY": "top",
		"left": left,
		"top": top,
		"width": pixel_width,
		"height": pixel_height,
		"pixelWidth": pixel_width,
		"pixelHeight": pixel_height,
		"scaleX": mm_to_e1_units(image_object.width_mm / pixel_width),
		"scaleY": mm_to_e1_units(image_object.height_mm / pixel_height),
		"subPrintModel": int(image_object.ink_mode),
		"angle": image_object.angle,
		"flipX": image_object.flip_x,
		"flipY": image_object.flip_y,
		"opacity": image_object.opacity,
	}
	converted.update(copy.deepcopy(IMAGE_COSMETIC_DEFAULTS))
	converted["visible"] = image_object.visible
	converted["_layerNameCus"] = image_object.layer_name
	converted["_customType"] = CUSTOM_IMAGE_TYPE
	converted[LOCK_FIELD] = image_object.lock
	converted[SKIP_PRINT_FIELD] = image_object.skip_print
	if image_object.lock:
		converted.update(LOCKED_IMAGE_OVERRIDES)

	# absent, not zero, when the ink mode has no such channel
	if image_object.white_layers is not None:
		converted["whiteLayerNum"] = image_object.white_layers
	if image_object.cmyk_layers is not None:
		converted["colorLayerNum"] = image_object.cmyk_layers
	if image_object.gloss_layers is not None:
		converted["varnishLayerNum"] = image_object.gloss_layers
	return converted


CONVERTERS: dict[CanvasObjectKind, Callable[..., dict]] = {
	CanvasObjectKind.IMAGE: convert_image_object,
}


#============================================
def convert_canvas_object(canvas_object, profile: PrintBedProfile) -> dict:
	"""
	Dispatch a canvas object to the converter for its kind.

	Args:
		canvas_object: Object with a kind attribute.
		profile: Active print bed profile.

	Returns:
		Canvas object dict.
	"""
	converter = CONVERTERS.get(canvas_object.kind)
	if converter is None:
		raise UnsupportedKindError(f"Unsupported canvas object type: {canvas_object.kind}")
	return converter(canvas_object, profile)


#============================================
def build_canvas_document(canvas_objects: list, profile: PrintBedProfile) -> dict:
	"""
	Build the canvas document with objects in insertion order.

	Args:
		canvas_objects: Canvas objects, bottom of the z-order first.
		profile: Active print bed profile.

	Returns:
		Canvas document dict.
	"""
	return {
		"version": SCHEMA_VERSION,
		"objects": [convert_canvas_object(obj, profile) for obj in canvas_objects],
		"id": CANVAS_DOCUMENT_ID,
		"selection": True,
	}


#============================================
def format_size_mm(value_units: int) -> int:
	"""
	Convert a bed dimension to whole millimeters.

	Args:
		value_units: E1 unit value.

	Returns:
		Rounded millimeters.
	"""
	return round_half_away_from_zero(e1_units_to_mm(value_units))


#============================================
def build_print_param(profile: PrintBedProfile) -> dict:
	"""
	Build the print parameters stored as a string in project info.

	Args:
		profile: Active print bed profile.

	Returns:
		Print parameter dict.
	"""
	width_mm = format_size_mm(profile.base_map_width)
	height_mm = format_size_mm(profile.base_map_height)
	return {
		"printModel": PRINT_MODEL,
		"imgQuality": PRINT_IMAGE_QUALITY,
		"printLayerData": [],
		"format_size_w": width_mm,
		"format_size_h": height_mm,
		"format_size_w_non": width_mm,
		"format_size_h_non": height_mm,
		"cavas_map": profile.base_map,
		"shape_cavas_map": "",
	}


#============================================
def build_project_info_document(
	profile: PrintBedProfile,
	canvas_id: str,
	project_id: str,
	project_name: str,
	timestamp: int,
) -> dict:
	"""
	Build the project metadata document.

	Args:
		profile: Active print bed profile.
		canvas_id: Canvas identifier.
		project_id: Project identifier.
		project_name: Display name.
		timestamp: Seconds since epoch for create and update times.

	Returns:
		Project info dict.
	"""
	canvas = {
		"base_map": profile.base_map,
		"base_map_width": profile.base_map_width,
		"base_map_height": profile.base_map_height,
		"canvas_id": canvas_id,
		"canvas_name": project_name,
		"category": profile.category,
		"sub_category": profile.sub_category,
		"is_standard_product": profile.is_standard_product,
		"create_time": timestamp,
		"update_time": timestamp,
		"extra": to_compact_json(CANVAS_EXTRA),
		"material_list": [],
		"model_link": "",
		"project_id": project_id,
		"print_param": to_compact_json(build_print_param(profile)),
		"scenes": "[]",
	}
	project_info = {
		"category": profile.category,
		"sub_category": profile.sub_category,
		"is_standard_product": profile.is_standard_product,
		"project_name": project_name,
		"dir_id": PROJECT_DIR_ID,
		"project_id": project_id,
		"create_time": timestamp,
		"update_time": timestamp,
		"sort_order": [canvas_id],
		"is_edited": 1,
		"is_published": 0,
		"works_id": "",
		"parents_works_id": "",
		"root_works_id": "",
		"works_status": 0,
		"project_desc": "",
		"project_type": PROJECT_TYPE,
		"tag_type": 0,
		"thumb_file": None,
	}
	return {
		"canvases": [canvas],
		"project_info": project_info,
		"canvasesIndex": 0,
		"gildException": False,
		"showGildException": False,
		"stickerException": False,
		"showStickerException": False,
	}
