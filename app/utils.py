from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, per_page: int) -> Tuple[int, List[T]]:
    """Return the clamped page number and the slice of items on it."""
    if per_page < 1:
        raise ValueError("per_page must be positive")
    page = max(page, 1)
    start = (page - 1) * per_page
    return page, list(items[start : start + per_page])
