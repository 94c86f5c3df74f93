# session_scheduler/tests/conftest.py

"""
Pytest configuration and fixtures for session scheduler tests.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pytest

from session_scheduler.core.collaborators import Rooms, Session, SessionCatalog

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@dataclass
class FakeSession(Session):
    """Session in a minisymposium group; part numbers order the group."""

    title: str
    theme: str
    priority_value: int = 0
    group: Optional[str] = None
    part: int = 0

    def higher_priority(self, other: "Session") -> bool:
        return self.priority_value > other.priority_value

    def priority(self) -> int:
        return self.priority_value

    def full_title(self) -> str:
        if self.group is None:
            return self.title
        return f"{self.title} (Part {self.part + 1})"


class FakeCatalog(SessionCatalog):
    """
    In-memory catalog with a deterministic rating in (0, 1].

    Penalties:
    - order: pairs of one group whose parts run out of order or in one slot
    - theme: extra sessions sharing a theme inside one slot
    - priority: adjacent occupied rooms whose priorities are inverted, and
      empty rooms ahead of occupied ones
    rating = 1 / (1 + total penalty), so 1.0 means no penalty at all.
    """

    def __init__(self, sessions: Sequence[FakeSession]):
        self.sessions: List[FakeSession] = list(sessions)
        self._themes = sorted({s.theme for s in self.sessions})
        self.rate_calls = 0

    def size(self) -> int:
        return len(self.sessions)

    def themes(self) -> Sequence[str]:
        return self._themes

    def get(self, session_id: int) -> FakeSession:
        return self.sessions[session_id]

    def get_theme(self, session_id: int) -> str:
        return self.sessions[session_id].theme

    def breaks_ordering(self, earlier_id: int, later_id: int) -> bool:
        earlier = self.sessions[earlier_id]
        later = self.sessions[later_id]
        return (
            earlier.group is not None
            and earlier.group == later.group
            and earlier.part > later.part
        )

    def slot_of(self, schedule: np.ndarray, session_id: int) -> Tuple[int, int]:
        slot, room = np.argwhere(schedule == session_id)[0]
        return int(slot), int(room)

    def rate(self, schedule, theme_penalties=None):
        self.rate_calls += 1
        n = self.size()
        num_timeslots, num_rooms = schedule.shape

        order_penalty = 0
        positions = {int(v): (s, r) for (s, r), v in np.ndenumerate(schedule) if v < n}
        for a in range(n):
            for b in range(n):
                sa, sb = self.sessions[a], self.sessions[b]
                if a == b or sa.group is None or sa.group != sb.group:
                    continue
                if sa.part < sb.part and positions[a][0] >= positions[b][0]:
                    order_penalty += 1

        theme_penalty = 0
        priority_penalty = 0
        for slot in range(num_timeslots):
            row = [int(v) for v in schedule[slot]]
            occupied = [v for v in row if v < n]
            seen = {}
            for v in occupied:
                theme = self.sessions[v].theme
                seen[theme] = seen.get(theme, 0) + 1
            for theme, count in seen.items():
                if count > 1:
                    theme_penalty += count - 1
                    if theme_penalties is not None:
                        theme_penalties[self._themes.index(theme)] += count - 1
            for j in range(num_rooms - 1):
                first, second = row[j], row[j + 1]
                if second >= n:
                    continue
                if first >= n or self.sessions[second].higher_priority(
                    self.sessions[first]
                ):
                    priority_penalty += 1

        total = order_penalty + theme_penalty + priority_penalty
        return 1.0 / (1.0 + total), order_penalty, 0, theme_penalty, priority_penalty


@pytest.fixture
def small_catalog() -> FakeCatalog:
    """Four sessions: a two-part minisymposium plus two ranked singles."""
    return FakeCatalog(
        [
            FakeSession("Solvers", "Linear Algebra", 1, group="MS1", part=0),
            FakeSession("Solvers", "Linear Algebra", 1, group="MS1", part=1),
            FakeSession("Keynote Follow-up", "Optimization", 5),
            FakeSession("Contributed Talks", "Machine Learning", 2),
        ]
    )


@pytest.fixture
def small_rooms() -> Rooms:
    return Rooms(["Room A", "Room B", "Room C"])


@pytest.fixture
def medium_catalog() -> FakeCatalog:
    """Nine sessions over three themes, including a three-part group."""
    return FakeCatalog(
        [
            FakeSession("Preconditioning", "Linear Algebra", 3, group="MS1", part=0),
            FakeSession("Preconditioning", "Linear Algebra", 3, group="MS1", part=1),
            FakeSession("Preconditioning", "Linear Algebra", 3, group="MS1", part=2),
            FakeSession("Graph Learning", "Machine Learning", 4, group="MS2", part=0),
            FakeSession("Graph Learning", "Machine Learning", 4, group="MS2", part=1),
            FakeSession("Interior Point Methods", "Optimization", 6),
            FakeSession("Stochastic Gradient", "Optimization", 2),
            FakeSession("Sparse Direct Solvers", "Linear Algebra", 1),
            FakeSession("Kernel Methods", "Machine Learning", 5),
        ]
    )


@pytest.fixture
def medium_rooms() -> Rooms:
    return Rooms(["Auditorium", "Room 101", "Room 102"])


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(20240611)


@pytest.fixture
def make_grid(rng):
    """Factory for uniformly random permutation grids."""

    def _make(num_timeslots: int, num_rooms: int) -> np.ndarray:
        return rng.permutation(num_timeslots * num_rooms).reshape(
            num_timeslots, num_rooms
        )

    return _make
