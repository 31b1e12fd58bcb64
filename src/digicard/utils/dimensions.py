"""Print page sizes and unit conversion."""

from dataclasses import dataclass as _dataclass


@_dataclass(frozen=True)
class PageSize:
    """Printable page size in inches."""

    width: float   # inches
    height: float  # inches
    label: str     # display label for CLI/help


# Registry of standard page sizes
PAGE_SIZES = {
    "letter": PageSize(8.5, 11.0, "Letter (8.5×11)"),
    "half": PageSize(5.5, 8.5, "Half Sheet (5.5×8.5)"),
    "a4": PageSize(8.27, 11.69, "A4 (210×297mm)"),
    "a5": PageSize(5.83, 8.27, "A5 (148×210mm)"),
    "a6": PageSize(4.13, 5.83, "A6 (105×148mm)"),
}

# Print margin on every side (inches)
PAGE_MARGIN = 0.5


def get_page_size(name: str) -> PageSize:
    """
    Get page size by name.

    Args:
        name: Page size name (e.g., "letter", "half", "a4").

    Returns:
        PageSize object. Defaults to letter if name not found.
    """
    return PAGE_SIZES.get(name.lower(), PAGE_SIZES["letter"])


def inches_to_points(inches: float) -> float:
    """Convert inches to points (72 points = 1 inch)."""
    return inches * 72
