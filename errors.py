# errors.py


class BloomError(Exception):
    """Base class for everything tinybloom raises on purpose."""


class BitmapOverflowError(BloomError, OverflowError):
    """Requested byte size does not fit the 64-bit bit-count domain."""


class BloomAllocationError(BloomError, MemoryError):
    """The bitmap buffer could not be allocated."""


class BloomDestroyedError(BloomError):
    """A membership call was made on a filter after destroy()."""
