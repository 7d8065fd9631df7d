"""mediascan — directory walker that reports media candidates with layered exclusion rules."""

__version__ = "0.1.0"


class MediascanError(Exception):
    """User-facing CLI error.

    Raised for invalid arguments, missing directories, and scans that
    could not complete. The message is printed to stderr and the
    process exits with code 1.
    """
