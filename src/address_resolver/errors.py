"""
Error taxonomy for address resolution.

These are raised inside the lookup layers and translated into a failed
ResolvedAddress by AddressResolver; they never escape resolve().
"""


class AddressResolutionError(Exception):
    """Base class for resolution failures."""

    code = "RESOLUTION_ERROR"


class MissingFieldError(AddressResolutionError):
    """A required input field (country, city, street) is empty."""

    code = "MISSING_FIELD"


class DataUnavailableError(AddressResolutionError):
    """The spatial dataset or the remote provider could not be reached."""

    code = "DATA_UNAVAILABLE"


class NotFoundError(AddressResolutionError):
    """A place or road is absent from the dataset."""

    code = "NOT_FOUND"


class OutOfRangeError(AddressResolutionError):
    """A road exists but not within the proximity radius."""

    code = "OUT_OF_RANGE"


class NoGeometryError(AddressResolutionError):
    """Neither interpolation nor a centroid can be computed."""

    code = "NO_GEOMETRY"
