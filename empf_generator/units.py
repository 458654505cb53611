"""
Millimeter and E1 unit conversion.

E1 units are the coordinate unit of the printer's desktop application.
Conversions into E1 units round half away from zero, so 0.5 becomes 1
and -0.5 becomes -1. Python's round() is not used because it rounds
half to even.
"""

# Standard Library
import math

# local repo modules
import empf_generator as empf
import empf_generator.config


E1_UNITS_PER_MM = empf.config.E1_UNITS_PER_MM


#============================================
def round_half_away_from_zero(value: float) -> int:
	"""
	Round to the nearest integer, ties away from zero.

	Args:
		value: Value to round.

	Returns:
		Rounded integer.
	"""
	magnitude = math.floor(abs(value) + 0.5)
	if value < 0:
		return -int(magnitude)
	return int(magnitude)


#============================================
def mm_to_e1_units(value_mm: float) -> int:
	"""
	Convert millimeters to whole E1 units.

	Args:
		value_mm: Millimeter value.

	Returns:
		E1 units.
	"""
	return round_half_away_from_zero(value_mm * E1_UNITS_PER_MM)


#============================================
def e1_units_to_mm(value_units: float) -> float:
	"""
	Convert E1 units to millimeters.

	Args:
		value_units: E1 unit value.

	Returns:
		Millimeter value.
	"""
	return value_units / E1_UNITS_PER_MM
