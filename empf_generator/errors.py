"""
Exceptions raised while building EMPF projects.
"""


class EmpfError(Exception):
	"""
	Base class for EMPF generator errors.
	"""


class UnsupportedFormatError(EmpfError, ValueError):
	"""
	Image bytes are not PNG, JPEG, or WEBP.
	"""


class UnsupportedKindError(EmpfError, TypeError):
	"""
	A canvas object kind has no conversion rule.
	"""
