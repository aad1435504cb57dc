"""Client-side queue of drafts awaiting a decision."""

from typing import List, Optional, Sequence

from ..core.draft_parser import DraftRecord


class ReviewQueue:
    """Ordered drafts plus the position of the card being shown.

    The index only moves forward and never passes ``len(drafts)``; at that
    point the queue is exhausted and the empty state is shown.
    """

    def __init__(self, drafts: Sequence[DraftRecord] = ()) -> None:
        self._drafts: List[DraftRecord] = list(drafts)
        self._index = 0

    @property
    def index(self) -> int:
        return self._index

    @property
    def drafts(self) -> List[DraftRecord]:
        return list(self._drafts)

    def __len__(self) -> int:
        return len(self._drafts)

    @property
    def current(self) -> Optional[DraftRecord]:
        if self.is_exhausted:
            return None
        return self._drafts[self._index]

    @property
    def remaining(self) -> int:
        return len(self._drafts) - self._index

    @property
    def is_exhausted(self) -> bool:
        return self._index >= len(self._drafts)

    def advance(self) -> bool:
        """Move to the next card; False once the queue is exhausted."""
        if self.is_exhausted:
            return False
        self._index += 1
        return True

    def reset(self, drafts: Sequence[DraftRecord]) -> None:
        self._drafts = list(drafts)
        self._index = 0

    def clear(self) -> None:
        self.reset(())
