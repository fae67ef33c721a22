from typing import Iterable, Iterator, List

from backend_ai.schemas.metadata_schema import ALL_CATEGORIES, MAX_CATEGORIES, filter_categories


class CategorySelection:
    """
    Checkbox group for media categories.

    Behaves as a set (no duplicates, membership only) but remembers the order in
    which categories were ticked so the export string is stable.
    """

    def __init__(self, values: Iterable[str] = (), limit: int = MAX_CATEGORIES):
        self.limit = limit
        self._selected: List[str] = []
        self.replace(values)

    def can_select(self, category: str) -> bool:
        """False means the checkbox is disabled."""
        if category in self._selected:
            return True
        return category in ALL_CATEGORIES and len(self._selected) < self.limit

    def select(self, category: str) -> bool:
        if category in self._selected:
            return True
        if not self.can_select(category):
            return False
        self._selected.append(category)
        return True

    def deselect(self, category: str):
        if category in self._selected:
            self._selected.remove(category)

    def toggle(self, category: str, checked: bool) -> bool:
        if checked:
            return self.select(category)
        self.deselect(category)
        return True

    def replace(self, values: Iterable[str]):
        """Drop the current selection and tick the known values; unknown ones are ignored."""
        kept = filter_categories(values)
        if len(kept) > self.limit:
            raise ValueError(f"Select up to {self.limit} categories.")
        self._selected = kept

    def clear(self):
        self._selected = []

    def as_list(self) -> List[str]:
        return list(self._selected)

    def joined(self) -> str:
        return ", ".join(self._selected)

    def __contains__(self, category) -> bool:
        return category in self._selected

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._selected))

    def __len__(self) -> int:
        return len(self._selected)

    def __eq__(self, other) -> bool:
        if isinstance(other, CategorySelection):
            return set(self._selected) == set(other._selected)
        return NotImplemented

    def __repr__(self):
        return f"CategorySelection({self._selected!r})"
