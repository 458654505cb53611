import dataclasses
import io
import math

import PIL.Image
import pytest

import empf_generator.canvas_objects as canvas_objects
import empf_generator.errors as errors
from image_helpers import make_image_bytes


InkMode = canvas_objects.InkMode
ImageOptions = canvas_objects.ImageOptions


#============================================
def test_ink_mode_codes() -> None:
	"""
	Ink mode codes match subPrintModel values.
	"""
	codes = {mode.name.lower(): int(mode) for mode in InkMode}
	assert codes == {
		"white_cmyk": 0,
		"cmyk": 1,
		"gloss": 2,
		"white": 3,
		"cmyk_white": 4,
		"cmyk_white_cmyk": 5,
		"cmyk_gloss": 6,
		"white_cmyk_gloss": 7,
		"sticker": 111,
	}


#============================================
def test_applicability_table_is_exhaustive() -> None:
	"""
	Every ink mode has exactly one applicability entry.
	"""
	assert set(canvas_objects.INK_LAYER_APPLICABILITY) == set(InkMode)
	sticker = canvas_objects.INK_LAYER_APPLICABILITY[InkMode.STICKER]
	assert (sticker.white, sticker.cmyk, sticker.gloss) == (False, False, False)


#============================================
@pytest.mark.parametrize("ink_mode", list(InkMode))
def test_layer_defaults_follow_applicability(ink_mode: InkMode) -> None:
	"""
	Applicable layer counts default to 1 and the rest stay unset.
	"""
	applicability = canvas_objects.INK_LAYER_APPLICABILITY[ink_mode]
	image_object = canvas_objects.build_image_object(
		make_image_bytes(),
		10.0,
		10.0,
		20.0,
		10.0,
		ImageOptions(ink_mode=ink_mode),
	)
	assert image_object.ink_mode is ink_mode
	assert image_object.white_layers == (1 if applicability.white else None)
	assert image_object.cmyk_layers == (1 if applicability.cmyk else None)
	assert image_object.gloss_layers == (1 if applicability.gloss else None)


#============================================
def test_defaults_without_options() -> None:
	"""
	An image without options gets the documented defaults.
	"""
	image_object = canvas_objects.build_image_object(make_image_bytes(), 100.0, 50.0, 50.0, 50.0)
	assert image_object.kind is canvas_objects.CanvasObjectKind.IMAGE
	assert image_object.mime_type == "image/png"
	assert image_object.ink_mode is InkMode.WHITE_CMYK
	assert image_object.white_layers == 1
	assert image_object.cmyk_layers == 1
	assert image_object.gloss_layers is None
	assert image_object.angle == 0
	assert image_object.flip_x is False
	assert image_object.flip_y is False
	assert image_object.opacity == 1
	assert image_object.layer_name == "Image Layer"
	assert image_object.lock is False
	assert image_object.visible is True
	assert image_object.skip_print is False


#============================================
def test_explicit_options_are_kept() -> None:
	"""
	Caller supplied options override defaults.
	"""
	options = ImageOptions(
		ink_mode="cmyk_gloss",
		cmyk_layers=3,
		gloss_layers=2,
		angle=90,
		flip_x=True,
		opacity=0.5,
		layer_name="Logo",
		lock=True,
		visible=False,
		skip_print=True,
	)
	image_object = canvas_objects.build_image_object(make_image_bytes(), 0, 0, 5, 5, options)
	assert image_object.ink_mode is InkMode.CMYK_GLOSS
	assert image_object.white_layers is None
	assert image_object.cmyk_layers == 3
	assert image_object.gloss_layers == 2
	assert image_object.angle == 90
	assert image_object.flip_x is True
	assert image_object.flip_y is False
	assert image_object.opacity == 0.5
	assert image_object.layer_name == "Logo"
	assert image_object.lock is True
	assert image_object.visible is False
	assert image_object.skip_print is True


#============================================
@pytest.mark.parametrize(
	("image_format", "mime_type"),
	[("PNG", "image/png"), ("JPEG", "image/jpeg"), ("WEBP", "image/webp")],
)
def test_sniff_supported_formats(image_format: str, mime_type: str) -> None:
	"""
	PNG, JPEG, and WEBP bytes are recognized.
	"""
	assert canvas_objects.sniff_mime_type(make_image_bytes(image_format)) == mime_type


#============================================
def test_sniff_rejects_other_formats() -> None:
	"""
	Text and unsupported image formats are rejected.
	"""
	with pytest.raises(errors.UnsupportedFormatError):
		canvas_objects.sniff_mime_type(b"definitely not an image")
	with pytest.raises(errors.UnsupportedFormatError):
		canvas_objects.sniff_mime_type(make_image_bytes("GIF"))
	with pytest.raises(errors.UnsupportedFormatError):
		canvas_objects.sniff_mime_type(make_image_bytes("BMP"))


#============================================
def test_probe_pixel_size() -> None:
	"""
	Pixel dimensions come from the encoded image.
	"""
	assert canvas_objects.probe_pixel_size(make_image_bytes("JPEG", (64, 32))) == (64, 32)


#============================================
def test_input_contract_violations() -> None:
	"""
	Wrong argument types and out of range values are rejected.
	"""
	with pytest.raises(TypeError):
		canvas_objects.build_image_object("image.png", 0, 0, 10, 10)
	with pytest.raises(TypeError):
		canvas_objects.build_image_object(make_image_bytes(), "0", 0, 10, 10)
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(make_image_bytes(), 0, 0, 0, 10)
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(make_image_bytes(), 0, 0, 10, 10, ImageOptions(white_layers=0))
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(make_image_bytes(), 0, 0, 10, 10, ImageOptions(opacity=1.5))
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(make_image_bytes(), 0, 0, 10, 10, ImageOptions(ink_mode=8))


#============================================
@pytest.mark.parametrize("bad_value", [math.nan, math.inf, -math.inf])
def test_non_finite_numbers_are_rejected(bad_value: float) -> None:
	"""
	NaN and infinite placements or options fail when the image is added.
	"""
	data = make_image_bytes()
	placements = [
		(bad_value, 0, 10, 10),
		(0, bad_value, 10, 10),
		(0, 0, bad_value, 10),
		(0, 0, 10, bad_value),
	]
	for placement in placements:
		with pytest.raises(ValueError):
			canvas_objects.build_image_object(data, *placement)
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(data, 0, 0, 10, 10, ImageOptions(angle=bad_value))
	with pytest.raises(ValueError):
		canvas_objects.build_image_object(data, 0, 0, 10, 10, ImageOptions(opacity=bad_value))


#============================================
def test_very_large_image_is_accepted() -> None:
	"""
	High resolution images above the Pillow pixel limit are still placed.
	"""
	image = PIL.Image.new("1", (20000, 10000))
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	data = buffer.getvalue()
	limit = PIL.Image.MAX_IMAGE_PIXELS

	image_object = canvas_objects.build_image_object(data, 0, 0, 300, 150)
	assert image_object.mime_type == "image/png"
	assert canvas_objects.probe_pixel_size(data) == (20000, 10000)
	assert PIL.Image.MAX_IMAGE_PIXELS == limit


#============================================
def test_parse_ink_mode() -> None:
	"""
	Ink modes resolve from members, codes, and names.
	"""
	assert canvas_objects.parse_ink_mode(InkMode.GLOSS) is InkMode.GLOSS
	assert canvas_objects.parse_ink_mode(111) is InkMode.STICKER
	assert canvas_objects.parse_ink_mode("white_cmyk_gloss") is InkMode.WHITE_CMYK_GLOSS
	assert canvas_objects.parse_ink_mode("3") is InkMode.WHITE
	with pytest.raises(ValueError):
		canvas_objects.parse_ink_mode("rainbow")


#============================================
def test_image_objects_are_immutable() -> None:
	"""
	Objects cannot change once created.
	"""
	image_object = canvas_objects.build_image_object(make_image_bytes(), 0, 0, 10, 10)
	with pytest.raises(dataclasses.FrozenInstanceError):
		image_object.x_mm = 5
