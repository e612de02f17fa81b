"""
Category lookup against the category range of a sheet.
"""

from typing import Any, Optional, Sequence


def normalize_category(name: Any) -> str:
    """Trimmed, case-folded form used for comparison."""
    return str(name).strip().casefold()


def resolve_category(rows: Sequence[Sequence[Any]], name: str) -> tuple[int, bool]:
    """
    Find the row whose first cell names `name`.

    Comparison ignores case and surrounding whitespace. The first
    match wins. Empty rows and blank cells never match.

    Returns:
        (row_index, found); row_index is 0 when nothing matched
    """
    wanted = normalize_category(name)
    if not wanted:
        return 0, False

    for index, row in enumerate(rows):
        if not row or row[0] is None:
            continue
        if normalize_category(row[0]) == wanted:
            return index, True

    return 0, False


def category_label(rows: Sequence[Sequence[Any]], index: int) -> Optional[str]:
    """The category name as spelled in the sheet, if the row has one."""
    if 0 <= index < len(rows) and rows[index]:
        return str(rows[index][0]).strip()
    return None
