"""
CLI entry points for image to EMPF conversion.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import empf_generator as empf
import empf_generator.archive
import empf_generator.canvas_objects
import empf_generator.config
import empf_generator.generator
import empf_generator.print_beds


GeneratorConfig = empf.config.GeneratorConfig
ImageOptions = empf.canvas_objects.ImageOptions
InkMode = empf.canvas_objects.InkMode
PrintBed = empf.print_beds.PrintBed

DEFAULT_PROJECT_NAME = empf.config.DEFAULT_PROJECT_NAME
DEFAULT_BACKGROUND_COLOR = empf.config.DEFAULT_BACKGROUND_COLOR


#============================================
def build_config(args: argparse.Namespace) -> GeneratorConfig:
	"""
	Build generator config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		GeneratorConfig.
	"""
	config = GeneratorConfig(
		print_bed=args.print_bed,
		project_name=args.project_name,
		background_color=args.background_color,
	)
	return config


#============================================
def build_image_options(args: argparse.Namespace) -> ImageOptions:
	"""
	Build per-image options from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ImageOptions shared by every image on the command line.
	"""
	return ImageOptions(
		ink_mode=args.ink_mode,
		white_layers=args.white_layers,
		cmyk_layers=args.cmyk_layers,
		gloss_layers=args.gloss_layers,
		angle=args.angle,
		flip_x=args.flip_x,
		flip_y=args.flip_y,
		opacity=args.opacity,
		layer_name=args.layer_name,
		lock=args.lock,
		visible=args.visible,
		skip_print=args.skip_print,
	)


#============================================
def parse_placement(values: list[str]) -> tuple[pathlib.Path, float, float, float, float]:
	"""
	Parse one --image PATH X Y W H group.

	Args:
		values: Five raw CLI values.

	Returns:
		Tuple of (path, x_mm, y_mm, width_mm, height_mm).
	"""
	path = pathlib.Path(values[0])
	try:
		x_mm, y_mm, width_mm, height_mm = (float(value) for value in values[1:])
	except ValueError:
		raise argparse.ArgumentTypeError(f"Placement for {path} must be numbers: {values[1:]}") from None
	return (path, x_mm, y_mm, width_mm, height_mm)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Place images on a UV printer bed and write an .empf project.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument(
		"-i", "--image", dest="images", action="append", nargs=5, default=[],
		metavar=("PATH", "X", "Y", "W", "H"),
		help="Image path, bottom-right x/y and width/height in mm. Repeat for more images.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output .empf path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	project_group = parser.add_argument_group("Project")
	project_group.add_argument(
		"-b", "--print-bed", dest="print_bed", default=PrintBed.STANDARD_FLATBED.value,
		choices=[bed.value for bed in PrintBed], help="Print bed.",
	)
	project_group.add_argument("-n", "--project-name", dest="project_name", default=DEFAULT_PROJECT_NAME, help="Project name.")
	project_group.add_argument("--background-color", dest="background_color", default=DEFAULT_BACKGROUND_COLOR, help="Canvas background color.")

	ink_group = parser.add_argument_group("Ink")
	ink_group.add_argument(
		"-k", "--ink-mode", dest="ink_mode", default=None,
		choices=[mode.name.lower() for mode in InkMode], help="Ink mode (default white_cmyk).",
	)
	ink_group.add_argument("--white-layers", dest="white_layers", type=int, default=None, help="White layer count.")
	ink_group.add_argument("--cmyk-layers", dest="cmyk_layers", type=int, default=None, help="CMYK layer count.")
	ink_group.add_argument("--gloss-layers", dest="gloss_layers", type=int, default=None, help="Gloss layer count.")

	layer_group = parser.add_argument_group("Layer")
	layer_group.add_argument("-a", "--angle", dest="angle", type=float, default=None, help="Rotation in degrees.")
	layer_group.add_argument("--flip-x", dest="flip_x", action="store_true", help="Flip horizontally.")
	layer_group.add_argument("--flip-y", dest="flip_y", action="store_true", help="Flip vertically.")
	layer_group.add_argument("--opacity", dest="opacity", type=float, default=None, help="Opacity from 0 to 1.")
	layer_group.add_argument("--layer-name", dest="layer_name", default=None, help="Layer name.")
	layer_group.add_argument("--lock", dest="lock", action="store_true", help="Lock the layers.")
	layer_group.add_argument("--hidden", dest="visible", action="store_false", help="Hide the layers.")
	layer_group.add_argument("--skip-print", dest="skip_print", action="store_true", help="Skip the layers when printing.")

	parser.set_defaults(
		flip_x=False,
		flip_y=False,
		lock=False,
		visible=True,
		skip_print=False,
	)

	args = parser.parse_args(argv)
	try:
		args.placements = [parse_placement(values) for values in args.images]
	except argparse.ArgumentTypeError as error:
		parser.error(str(error))
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Place every image and write the .empf project.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Images to EMPF pipeline")
	print(f"Output EMPF: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")
	print(f"Print bed: {args.print_bed}")
	print(f"Project name: {args.project_name}")
	print(f"Images: {len(args.placements)}")

	start_time = time.perf_counter()
	generator = empf.generator.EmpfGenerator(build_config(args))
	options = build_image_options(args)
	for path, x_mm, y_mm, width_mm, height_mm in args.placements:
		generator.add_image_file(path, x_mm, y_mm, width_mm, height_mm, options)
		print(f"Placed {path.name}: {width_mm:g} x {height_mm:g} mm at ({x_mm:g}, {y_mm:g})")
	place_end = time.perf_counter()

	output_path = pathlib.Path(args.output_path)
	generator.export(output_path)
	export_end = time.perf_counter()
	print(f"Canvas id: {generator.canvas_id}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	empf.archive.write_manifest(
		pathlib.Path(manifest_path),
		output_path,
		[placement[0] for placement in args.placements],
		generator.print_bed.value,
		generator.project_name,
		generator.canvas_id,
		generator.project_id,
	)

	print(
		"Timing: place={:.2f}s export={:.2f}s".format(
			place_end - start_time,
			export_end - place_end,
		)
	)
	print(f"Manifest written: {manifest_path}")


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)
