"""
Canvas objects and add-time validation.
"""

# Standard Library
import dataclasses
import enum
import io
import math

# PIP3 modules
import PIL.Image

# local repo modules
import empf_generator as empf
import empf_generator.config
import empf_generator.errors


SUPPORTED_MIME_TYPES = empf.config.SUPPORTED_MIME_TYPES
DEFAULT_LAYER_NAME = empf.config.DEFAULT_LAYER_NAME
DEFAULT_LAYER_COUNT = empf.config.DEFAULT_LAYER_COUNT
UnsupportedFormatError = empf.errors.UnsupportedFormatError


class InkMode(enum.IntEnum):
	"""
	Ink channels used for an object, written as subPrintModel.
	"""
	WHITE_CMYK = 0
	CMYK = 1
	GLOSS = 2
	WHITE = 3
	CMYK_WHITE = 4
	CMYK_WHITE_CMYK = 5
	CMYK_GLOSS = 6
	WHITE_CMYK_GLOSS = 7
	STICKER = 111


class CanvasObjectKind(str, enum.Enum):
	IMAGE = "image"
	RECT = "rect"


@dataclasses.dataclass(frozen=True)
class LayerApplicability:
	white: bool
	cmyk: bool
	gloss: bool


INK_LAYER_APPLICABILITY = {
	InkMode.WHITE_CMYK: LayerApplicability(white=True, cmyk=True, gloss=False),
	InkMode.CMYK: LayerApplicability(white=False, cmyk=True, gloss=False),
	InkMode.GLOSS: LayerApplicability(white=False, cmyk=False, gloss=True),
	InkMode.WHITE: LayerApplicability(white=True, cmyk=False, gloss=False),
	InkMode.CMYK_WHITE: LayerApplicability(white=True, cmyk=True, gloss=False),
	InkMode.CMYK_WHITE_CMYK: LayerApplicability(white=True, cmyk=True, gloss=False),
	InkMode.CMYK_GLOSS: LayerApplicability(white=False, cmyk=True, gloss=True),
	InkMode.WHITE_CMYK_GLOSS: LayerApplicability(white=True, cmyk=True, gloss=True),
	InkMode.STICKER: LayerApplicability(white=False, cmyk=False, gloss=False),
}


@dataclasses.dataclass
class ImageOptions:
	"""
	Per-image print options. None means "use the default".
	"""
	ink_mode: "InkMode | int | str | None" = None
	white_layers: int | None = None
	cmyk_layers: int | None = None
	gloss_layers: int | None = None
	angle: float | None = None
	flip_x: bool | None = None
	flip_y: bool | None = None
	opacity: float | None = None
	layer_name: str | None = None
	lock: bool | None = None
	visible: bool | None = None
	skip_print: bool | None = None


@dataclasses.dataclass(frozen=True)
class ImageObject:
	"""
	A placed image with every option resolved.

	x_mm and y_mm locate the bottom-right corner of the image. A layer
	count of None means the field does not apply to the ink mode and is
	left out of the canvas document.
	"""
	data: bytes
	mime_type: str
	x_mm: float
	y_mm: float
	width_mm: float
	height_mm: float
	ink_mode: InkMode
	white_layers: int | None
	cmyk_layers: int | None
	gloss_layers: int | None
	angle: float = 0
	flip_x: bool = False
	flip_y: bool = False
	opacity: float = 1
	layer_name: str = DEFAULT_LAYER_NAME
	lock: bool = False
	visible: bool = True
	skip_print: bool = False
	kind: CanvasObjectKind = CanvasObjectKind.IMAGE


#============================================
def parse_ink_mode(value: "InkMode | int | str") -> InkMode:
	"""
	Resolve an ink mode from a member, integer code, or name.

	Args:
		value: InkMode, code such as 111, or name such as "white_cmyk".

	Returns:
		InkMode member.
	"""
	if isinstance(value, InkMode):
		return value
	if isinstance(value, str):
		key = value.strip().upper()
		if key in InkMode.__members__:
			return InkMode[key]
		if key.isdigit():
			value = int(key)
	if isinstance(value, int) and not isinstance(value, bool):
		try:
			return InkMode(value)
		except ValueError:
			pass
	choices = ", ".join(mode.name.lower() for mode in InkMode)
	raise ValueError(f"Unknown ink mode {value!r}, expected one of: {choices}")


#============================================
def open_image_header(data: bytes) -> PIL.Image.Image:
	"""
	Open image bytes lazily, without the decompression bomb limit.

	Args:
		data: Raw image bytes.

	Returns:
		Unloaded PIL image.
	"""
	# pixels are never decoded here, only the header is read
	limit = PIL.Image.MAX_IMAGE_PIXELS
	PIL.Image.MAX_IMAGE_PIXELS = None
	try:
		return PIL.Image.open(io.BytesIO(data))
	finally:
		PIL.Image.MAX_IMAGE_PIXELS = limit


#============================================
def sniff_mime_type(data: bytes) -> str:
	"""
	Identify the container format of image bytes.

	Args:
		data: Raw image bytes.

	Returns:
		MIME type string.
	"""
	try:
		with open_image_header(data) as image:
			image_format = image.format
	except PIL.UnidentifiedImageError:
		raise UnsupportedFormatError("Unsupported image MIME type: unrecognized data") from None
	mime_type = SUPPORTED_MIME_TYPES.get(image_format)
	if mime_type is None:
		detected = PIL.Image.MIME.get(image_format, image_format)
		raise UnsupportedFormatError(f"Unsupported image MIME type: {detected}")
	return mime_type


#============================================
def probe_pixel_size(data: bytes) -> tuple[int, int]:
	"""
	Read the pixel dimensions of image bytes.

	Args:
		data: Raw image bytes.

	Returns:
		Tuple of (width, height).
	"""
	with open_image_header(data) as image:
		return image.size


#============================================
def _require_number(name: str, value: float) -> None:
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise TypeError(f"{name} must be a number, got {type(value).__name__}")
	if not math.isfinite(value):
		raise ValueError(f"{name} must be finite, got {value}")


#============================================
def _resolve_layer_count(name: str, value: int | None, applies: bool) -> int | None:
	"""
	Default a layer count when it applies to the ink mode.

	Args:
		name: Option name for error messages.
		value: Caller supplied count or None.
		applies: Whether the ink mode uses this channel.

	Returns:
		Layer count, or None when unset and not applicable.
	"""
	if value is None:
		if applies:
			return DEFAULT_LAYER_COUNT
		return None
	if isinstance(value, bool) or not isinstance(value, int) or value < 1:
		raise ValueError(f"{name} must be a positive integer, got {value!r}")
	return value


#============================================
def _pick(value, default):
	if value is None:
		return default
	return value


#============================================
def build_image_object(
	data: bytes,
	x_mm: float,
	y_mm: float,
	width_mm: float,
	height_mm: float,
	options: ImageOptions | None = None,
) -> ImageObject:
	"""
	Validate image input and resolve all option defaults.

	Args:
		data: Raw PNG, JPEG, or WEBP bytes.
		x_mm: Bottom-right x coordinate in mm.
		y_mm: Bottom-right y coordinate in mm.
		width_mm: Image width in mm.
		height_mm: Image height in mm.
		options: Optional print options.

	Returns:
		ImageObject ready to append to a canvas.
	"""
	if not isinstance(data, (bytes, bytearray)):
		raise TypeError(f"Image must be bytes, got {type(data).__name__}")
	data = bytes(data)
	mime_type = sniff_mime_type(data)

	for name, value in (("x_mm", x_mm), ("y_mm", y_mm), ("width_mm", width_mm), ("height_mm", height_mm)):
		_require_number(name, value)
	if width_mm <= 0 or height_mm <= 0:
		raise ValueError(f"Image size must be positive, got {width_mm} x {height_mm} mm")

	if options is None:
		options = ImageOptions()
	ink_mode = parse_ink_mode(_pick(options.ink_mode, InkMode.WHITE_CMYK))
	applicability = INK_LAYER_APPLICABILITY[ink_mode]

	opacity = _pick(options.opacity, 1)
	_require_number("opacity", opacity)
	if not 0 <= opacity <= 1:
		raise ValueError(f"opacity must be between 0 and 1, got {opacity}")
	angle = _pick(options.angle, 0)
	_require_number("angle", angle)

	image_object = ImageObject(
		data=data,
		mime_type=mime_type,
		x_mm=x_mm,
		y_mm=y_mm,
		width_mm=width_mm,
		height_mm=height_mm,
		ink_mode=ink_mode,
		white_layers=_resolve_layer_count("white_layers", options.white_layers, applicability.white),
		cmyk_layers=_resolve_layer_count("cmyk_layers", options.cmyk_layers, applicability.cmyk),
		gloss_layers=_resolve_layer_count("gloss_layers", options.gloss_layers, applicability.gloss),
		angle=angle,
		flip_x=_pick(options.flip_x, False),
		flip_y=_pick(options.flip_y, False),
		opacity=opacity,
		layer_name=_pick(options.layer_name, DEFAULT_LAYER_NAME),
		lock=_pick(options.lock, False),
		visible=_pick(options.visible, True),
		skip_print=_pick(options.skip_print, False),
	)
	return image_object
