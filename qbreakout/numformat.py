"""Number formatting for log output."""


def format_number(value: int) -> str:
    """Format an integer with ``_`` as thousands separator, e.g. ``1_000``."""
    return format(value, "_d")