"""
Print bed geometry and metadata.
"""

# Standard Library
import dataclasses
import enum


class PrintBed(str, enum.Enum):
	STANDARD_FLATBED = "standardFlatbed"
	MINI_FLATBED = "miniFlatbed"


@dataclasses.dataclass(frozen=True)
class PrintBedProfile:
	"""
	Static description of one print bed.

	Coordinates and sizes are in E1 units. The zero point is the
	bottom-right corner that image placements are measured from.
	"""
	zero_point_x: int
	zero_point_y: int
	base_map_width: int
	base_map_height: int
	base_map: str
	category: int | str
	sub_category: int | str
	is_standard_product: bool


PRINT_BED_PROFILES = {
	PrintBed.STANDARD_FLATBED: PrintBedProfile(
		zero_point_x=330000,
		zero_point_y=420000,
		base_map_width=330000,
		base_map_height=420000,
		base_map="e1_standard_flatbed.png",
		category=1,
		sub_category=101,
		is_standard_product=True,
	),
	PrintBed.MINI_FLATBED: PrintBedProfile(
		zero_point_x=200000,
		zero_point_y=150000,
		base_map_width=200000,
		base_map_height=150000,
		base_map="e1_mini_flatbed.png",
		category=1,
		sub_category=102,
		is_standard_product=True,
	),
}


#============================================
def parse_print_bed(value: "PrintBed | str") -> PrintBed:
	"""
	Resolve a print bed from an enum member or its name.

	Args:
		value: PrintBed member or identifier such as "miniFlatbed".

	Returns:
		PrintBed member.
	"""
	if isinstance(value, PrintBed):
		return value
	try:
		return PrintBed(value)
	except ValueError:
		choices = ", ".join(bed.value for bed in PrintBed)
		raise ValueError(f"Unknown print bed {value!r}, expected one of: {choices}") from None


#============================================
def get_print_bed_profile(print_bed: PrintBed) -> PrintBedProfile:
	"""
	Look up the profile for a print bed.

	Args:
		print_bed: PrintBed member.

	Returns:
		PrintBedProfile.
	"""
	return PRINT_BED_PROFILES[print_bed]
