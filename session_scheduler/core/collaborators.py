# session_scheduler/core/collaborators.py

"""
Interfaces the scheduler consumes from the conference data model.

The scheduler never scores a schedule itself. A SessionCatalog rates a grid
and answers the ordering and priority questions the repair pass asks; a
RoomCatalog names the rooms for reports. Catalogs are called concurrently from
worker threads and must be safe for concurrent reads.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np


class RatingBreakdown(NamedTuple):
    """Rating of one schedule plus its diagnostic penalty terms"""

    rating: float
    order_penalty: int = 0
    oversubscribed_penalty: int = 0
    theme_penalty: int = 0
    priority_penalty: int = 0

    @property
    def penalties(self) -> Tuple[int, int, int, int]:
        return (
            self.order_penalty,
            self.oversubscribed_penalty,
            self.theme_penalty,
            self.priority_penalty,
        )


PENALTY_NAMES = ("order", "oversubscribed", "theme", "priority")


class Session(ABC):
    """A schedulable session (e.g. one part of a minisymposium)"""

    @abstractmethod
    def higher_priority(self, other: "Session") -> bool:
        """True if this session should take an earlier room than other."""
        raise NotImplementedError

    @abstractmethod
    def priority(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def full_title(self) -> str:
        raise NotImplementedError


class SessionCatalog(ABC):
    """The sessions to schedule and the scoring function over schedules"""

    @abstractmethod
    def size(self) -> int:
        """Number of real sessions; ids at or above this are empty cells."""
        raise NotImplementedError

    @abstractmethod
    def themes(self) -> Sequence[str]:
        raise NotImplementedError

    @abstractmethod
    def get(self, session_id: int) -> Session:
        raise NotImplementedError

    @abstractmethod
    def get_theme(self, session_id: int) -> str:
        raise NotImplementedError

    @abstractmethod
    def breaks_ordering(self, earlier_id: int, later_id: int) -> bool:
        """
        True if placing earlier_id in an earlier timeslot than later_id
        violates an ordering constraint (e.g. part 2 before part 1).
        """
        raise NotImplementedError

    @abstractmethod
    def rate(
        self, schedule: np.ndarray, theme_penalties: Optional[np.ndarray] = None
    ) -> Tuple[float, int, int, int, int]:
        """
        Rate a (timeslots x rooms) schedule; higher is better.

        Args:
            schedule: Grid of session ids. Must not be modified or retained.
            theme_penalties: Optional integer vector, one entry per theme,
                that the catalog may fill with per-theme penalties.

        Returns:
            (rating, order_penalty, oversubscribed_penalty, theme_penalty,
            priority_penalty)
        """
        raise NotImplementedError

    def __getitem__(self, session_id: int) -> Session:
        return self.get(session_id)

    def __len__(self) -> int:
        return self.size()


class RoomCatalog(ABC):
    """The rooms available in every timeslot"""

    @abstractmethod
    def size(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def name(self, room_index: int) -> str:
        raise NotImplementedError

    def __len__(self) -> int:
        return self.size()


class Rooms(RoomCatalog):
    """List-backed room catalog"""

    def __init__(self, names: Iterable[str]):
        self._names: List[str] = [str(n) for n in names]

    def size(self) -> int:
        return len(self._names)

    def name(self, room_index: int) -> str:
        return self._names[room_index]

    def __repr__(self) -> str:
        return f"Rooms({self._names!r})"
