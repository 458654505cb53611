"""
In-memory test images.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image


#============================================
def make_image_bytes(image_format: str = "PNG", size: tuple[int, int] = (100, 50)) -> bytes:
	"""
	Render a solid image into encoded bytes.

	Args:
		image_format: Pillow format name.
		size: Pixel (width, height).

	Returns:
		Encoded image bytes.
	"""
	image = PIL.Image.new("RGB", size, (200, 30, 30))
	buffer = io.BytesIO()
	image.save(buffer, format=image_format)
	return buffer.getvalue()
