"""Section ordering rules."""

from digicard.models import SECTION_IDS
from digicard.types import Direction


def normalize_section_order(order: list[str]) -> list[str]:
    """
    Canonicalize a card's section order.

    Unknown ids are dropped, duplicates keep their first occurrence and known
    sections that are missing are appended in their default order.

    Args:
        order: Section ids as stored on the card.

    Returns:
        New list containing every known section exactly once.
    """
    normalized: list[str] = []
    for section_id in order:
        if section_id in SECTION_IDS and section_id not in normalized:
            normalized.append(section_id)
    for section_id in SECTION_IDS:
        if section_id not in normalized:
            normalized.append(section_id)
    return normalized


def unique_sections(order: list[str]) -> list[str]:
    """
    Drop repeated ids, keeping the first occurrence.

    Args:
        order: Section ids in display order.

    Returns:
        New list without duplicates.
    """
    seen: set[str] = set()
    result: list[str] = []
    for section_id in order:
        if section_id not in seen:
            seen.add(section_id)
            result.append(section_id)
    return result


def move_section(order: list[str], index: int, direction: Direction) -> list[str]:
    """
    Swap the section at index with its neighbour.

    Moving the first entry up or the last entry down leaves the order
    unchanged, as does an index outside the list.

    Args:
        order: Current section order.
        index: Position of the section to move.
        direction: "up" (towards index 0) or "down".

    Returns:
        New list with the swap applied.

    Raises:
        ValueError: If direction is not "up" or "down".
    """
    if direction not in ("up", "down"):
        raise ValueError(f"Direction must be 'up' or 'down', got: {direction}")

    new_order = list(order)
    if not 0 <= index < len(new_order):
        return new_order

    if direction == "up" and index > 0:
        new_order[index - 1], new_order[index] = new_order[index], new_order[index - 1]
    elif direction == "down" and index < len(new_order) - 1:
        new_order[index + 1], new_order[index] = new_order[index], new_order[index + 1]
    return new_order
