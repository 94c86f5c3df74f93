# session_scheduler/export/report_builder.py

"""
Schedule report export.

Renders one schedule grid as a table listing, per timeslot, the session in
each occupied room with its theme, priority and room name. Writing a report is
best effort: a destination that cannot be opened is logged and skipped, never
raised into the optimization run.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import numpy as np

from ..core.collaborators import RoomCatalog, SessionCatalog
from ..core.grid import is_session, iter_cells

logger = logging.getLogger(__name__)

# Define supported output formats using Literal for better type hinting
ReportFormat = Literal["markdown", "csv"]

REPORT_COLUMNS = ["slot", "room", "title", "theme", "priority"]

_SUFFIX_FORMATS = {".md": "markdown", ".markdown": "markdown", ".csv": "csv"}


class ReportBuilder:
    """
    Builds schedule reports in Markdown or CSV.

    The Markdown layout has one table per timeslot, headed by the schedule's
    rating. CSV has one row per occupied cell.
    """

    def __init__(self, sessions: SessionCatalog, rooms: RoomCatalog):
        self.sessions = sessions
        self.rooms = rooms
        self._builders = {
            "markdown": self._build_markdown_internal,
            "csv": self._build_csv_internal,
        }

    def rows(self, schedule: np.ndarray) -> List[Dict[str, Any]]:
        """One row per occupied cell, in timeslot then room order."""
        num_sessions = self.sessions.size()
        rows: List[Dict[str, Any]] = []
        for slot, room in iter_cells(schedule):
            session_id = int(schedule[slot, room])
            if not is_session(session_id, num_sessions):
                continue
            session = self.sessions[session_id]
            rows.append(
                {
                    "slot": slot,
                    "room": self.rooms.name(room),
                    "title": session.full_title(),
                    "theme": self.sessions.get_theme(session_id),
                    "priority": session.priority(),
                }
            )
        return rows

    def build(
        self,
        output_format: ReportFormat,
        schedule: np.ndarray,
        rating: Optional[float] = None,
    ) -> bytes:
        """
        Builds a report of `schedule` in the requested format.

        Raises:
            ValueError: If the specified output_format is unsupported.
        """
        builder_func = self._builders.get(output_format.lower())
        if not builder_func:
            raise ValueError(f"Unsupported report format: {output_format}")
        return builder_func(schedule=schedule, rating=rating)

    def write(
        self,
        path: Union[str, Path],
        schedule: np.ndarray,
        rating: Optional[float] = None,
        output_format: Optional[ReportFormat] = None,
    ) -> bool:
        """
        Write a report to `path`; the format defaults from the file suffix
        (Markdown when unknown). Returns False if the file could not be written.
        """
        path = Path(path)
        fmt = output_format or _SUFFIX_FORMATS.get(path.suffix.lower(), "markdown")
        content = self.build(fmt, schedule, rating)
        try:
            with open(path, "wb") as handle:
                handle.write(content)
        except OSError as e:
            logger.warning(f"Could not write schedule report to {path}: {e}")
            return False

        logger.info(f"Wrote {fmt} schedule report to {path}")
        return True

    def format_text(self, schedule: np.ndarray) -> str:
        """Plain listing of a schedule: 'Slot n:' then 'title (theme)' per room."""
        lines: List[str] = []
        rows = self.rows(schedule)
        for slot in range(schedule.shape[0]):
            lines.append(f"Slot {slot}:")
            for row in rows:
                if row["slot"] == slot:
                    lines.append(f"{row['title']} ({row['theme']})")
        return "\n".join(lines)

    def _build_markdown_internal(
        self, schedule: np.ndarray, rating: Optional[float], **kwargs
    ) -> bytes:
        out = io.StringIO()
        if rating is None:
            out.write("# Conference schedule\n\n")
        else:
            out.write(f"# Conference schedule with score {rating}\n\n")

        rows = self.rows(schedule)
        for slot in range(schedule.shape[0]):
            out.write(f"|Slot {slot}|   |   |   |\n|---|---|---|---|\n")
            for row in rows:
                if row["slot"] != slot:
                    continue
                out.write(
                    f"|{row['title']}|{row['theme']}|{row['priority']}|{row['room']}|\n"
                )
            out.write("\n")
        return out.getvalue().encode("utf-8")

    def _build_csv_internal(self, schedule: np.ndarray, **kwargs) -> bytes:
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=REPORT_COLUMNS)
        writer.writeheader()
        for row in self.rows(schedule):
            writer.writerow({k: row.get(k) for k in REPORT_COLUMNS})
        return output.getvalue().encode("utf-8")
