"""
EMPF archive packaging.
"""

# Standard Library
import hashlib
import io
import json
import pathlib
import zipfile

# local repo modules
import empf_generator as empf
import empf_generator.config
import empf_generator.serialize


FONT_MAPPING_PATH = empf.config.FONT_MAPPING_PATH
CANVAS_PATH_TEMPLATE = empf.config.CANVAS_PATH_TEMPLATE
PROJECT_INFO_PATH = empf.config.PROJECT_INFO_PATH


#============================================
def canvas_entry_path(canvas_id: str) -> str:
	"""
	Return the archive path of the canvas document.

	Args:
		canvas_id: Canvas identifier.

	Returns:
		Archive entry path.
	"""
	return CANVAS_PATH_TEMPLATE.format(canvas_id=canvas_id)


#============================================
def build_archive_entries(canvas_id: str, canvas_document: dict, project_info_document: dict) -> dict[str, bytes]:
	"""
	Build the named entries of an EMPF archive.

	Args:
		canvas_id: Canvas identifier.
		canvas_document: Canvas document dict.
		project_info_document: Project info dict.

	Returns:
		Mapping of archive path to entry bytes.
	"""
	return {
		FONT_MAPPING_PATH: b"{}",
		canvas_entry_path(canvas_id): empf.serialize.encode_json(canvas_document),
		PROJECT_INFO_PATH: empf.serialize.encode_json(project_info_document),
	}


#============================================
def pack_archive(entries: dict[str, bytes]) -> bytes:
	"""
	Pack entries into zip bytes.

	Args:
		entries: Mapping of archive path to entry bytes.

	Returns:
		Zip archive bytes.
	"""
	buffer = io.BytesIO()
	with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
		for name, data in entries.items():
			archive.writestr(name, data)
	return buffer.getvalue()


#============================================
def write_archive(output_path: pathlib.Path, archive_bytes: bytes) -> None:
	"""
	Write archive bytes to disk.

	Args:
		output_path: Destination path.
		archive_bytes: Zip archive bytes.
	"""
	pathlib.Path(output_path).write_bytes(archive_bytes)


#============================================
def read_archive(source: "pathlib.Path | str | bytes") -> dict[str, bytes]:
	"""
	Read every entry of an EMPF archive.

	Args:
		source: Archive path or archive bytes.

	Returns:
		Mapping of archive path to entry bytes.
	"""
	if isinstance(source, (bytes, bytearray)):
		source = io.BytesIO(source)
	with zipfile.ZipFile(source, "r") as archive:
		return {name: archive.read(name) for name in archive.namelist()}


#============================================
def compute_sha256(path: pathlib.Path) -> str:
	"""
	Compute SHA256 hash for a file.

	Args:
		path: File path.

	Returns:
		Hex digest.
	"""
	hasher = hashlib.sha256()
	with path.open("rb") as handle:
		for chunk in iter(lambda: handle.read(1024 * 1024), b""):
			hasher.update(chunk)
	return hasher.hexdigest()


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	output_path: pathlib.Path,
	image_paths: list[pathlib.Path],
	print_bed: str,
	project_name: str,
	canvas_id: str,
	project_id: str,
) -> None:
	"""
	Write a JSON summary of an export.

	Args:
		manifest_path: Manifest output path.
		output_path: Written EMPF path.
		image_paths: Input image paths in z-order.
		print_bed: Print bed identifier.
		project_name: Project display name.
		canvas_id: Canvas identifier.
		project_id: Project identifier.
	"""
	data = {
		"output": str(output_path),
		"output_sha256": compute_sha256(output_path),
		"inputs": [str(path) for path in image_paths],
		"input_hashes": {str(path): compute_sha256(path) for path in image_paths},
		"object_count": len(image_paths),
		"print_bed": print_bed,
		"project_name": project_name,
		"canvas_id": canvas_id,
		"project_id": project_id,
		"entries": [
			FONT_MAPPING_PATH,
			canvas_entry_path(canvas_id),
			PROJECT_INFO_PATH,
		],
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
