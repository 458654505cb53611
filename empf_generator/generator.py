"""
EMPF project generator.

Placements are kept in millimeters while objects are added and are only
converted to E1 units when the archive is built.
"""

# Standard Library
import pathlib
import secrets
import time

# local repo modules
import empf_generator as empf
import empf_generator.archive
import empf_generator.canvas_objects
import empf_generator.config
import empf_generator.print_beds
import empf_generator.serialize


GeneratorConfig = empf.config.GeneratorConfig
ImageObject = empf.canvas_objects.ImageObject
ImageOptions = empf.canvas_objects.ImageOptions
PrintBed = empf.print_beds.PrintBed
PrintBedProfile = empf.print_beds.PrintBedProfile

SCHEMA_VERSION = empf.config.SCHEMA_VERSION


#============================================
def generate_identifier() -> str:
	"""
	Generate a 32 character hex identifier.

	Returns:
		Hex string.
	"""
	return secrets.token_hex(16)


class EmpfGenerator:
	"""
	Collects canvas objects and exports them as an .empf archive.

	Not safe for concurrent use; separate instances are independent.
	"""

	def __init__(
		self,
		config: GeneratorConfig | None = None,
		print_bed: "PrintBed | str | None" = None,
		project_name: str | None = None,
		background_color: str | None = None,
	) -> None:
		if config is None:
			config = GeneratorConfig()
		self._print_bed = empf.print_beds.parse_print_bed(
			print_bed if print_bed is not None else config.print_bed
		)
		self._project_name = project_name if project_name is not None else config.project_name
		self._background_color = (
			background_color if background_color is not None else config.background_color
		)
		self._version = SCHEMA_VERSION
		self._canvas_id = generate_identifier()
		self._project_id = generate_identifier()
		self._canvas_objects: list[ImageObject] = []

	@property
	def print_bed(self) -> PrintBed:
		return self._print_bed

	@property
	def project_name(self) -> str:
		return self._project_name

	@property
	def background_color(self) -> str:
		return self._background_color

	@property
	def version(self) -> str:
		return self._version

	@property
	def canvas_id(self) -> str:
		return self._canvas_id

	@property
	def project_id(self) -> str:
		return self._project_id

	@property
	def canvas_objects(self) -> tuple[ImageObject, ...]:
		return tuple(self._canvas_objects)

	@property
	def profile(self) -> PrintBedProfile:
		return empf.print_beds.get_print_bed_profile(self._print_bed)

	#============================================
	def add_image(
		self,
		image_data: bytes,
		x_mm: float,
		y_mm: float,
		width_mm: float,
		height_mm: float,
		options: ImageOptions | None = None,
	) -> None:
		"""
		Add an image to the top of the canvas.

		Args:
			image_data: PNG, JPEG, or WEBP bytes.
			x_mm: X coordinate of the bottom-right corner, in mm.
			y_mm: Y coordinate of the bottom-right corner, in mm.
			width_mm: Image width in mm.
			height_mm: Image height in mm.
			options: Optional print options.
		"""
		image_object = empf.canvas_objects.build_image_object(
			image_data,
			x_mm,
			y_mm,
			width_mm,
			height_mm,
			options,
		)
		self._canvas_objects.append(image_object)

	#============================================
	def add_image_file(
		self,
		image_path: pathlib.Path,
		x_mm: float,
		y_mm: float,
		width_mm: float,
		height_mm: float,
		options: ImageOptions | None = None,
	) -> None:
		"""
		Read an image file and add it to the canvas.
		"""
		image_data = pathlib.Path(image_path).read_bytes()
		self.add_image(image_data, x_mm, y_mm, width_mm, height_mm, options)

	#============================================
	def build_canvas_document(self) -> dict:
		return empf.serialize.build_canvas_document(self._canvas_objects, self.profile)

	#============================================
	def build_project_info_document(self, timestamp: int | None = None) -> dict:
		if timestamp is None:
			timestamp = int(time.time())
		return empf.serialize.build_project_info_document(
			self.profile,
			self._canvas_id,
			self._project_id,
			self._project_name,
			timestamp,
		)

	#============================================
	def to_bytes(self) -> bytes:
		"""
		Build the .empf archive in memory.

		Returns:
			Zip archive bytes.
		"""
		entries = empf.archive.build_archive_entries(
			self._canvas_id,
			self.build_canvas_document(),
			self.build_project_info_document(),
		)
		return empf.archive.pack_archive(entries)

	#============================================
	def export(self, output_path: pathlib.Path) -> None:
		"""
		Write the .empf archive to disk.

		Args:
			output_path: Destination path.
		"""
		empf.archive.write_archive(pathlib.Path(output_path), self.to_bytes())
