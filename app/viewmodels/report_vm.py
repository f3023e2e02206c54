"""ViewModel for running a sync pass and presenting its report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from loguru import logger

from core.models import CollectionOfMissing, PhotoCollection, Username
from core.services.sync_service import SyncAllPhotosService
from infrastructure.utils import format_day


@dataclass
class PeerReportRow:
    """Photos one peer has that the owner lacks on a given day."""

    peer: str
    photo_ids: list[str] = field(default_factory=list)


@dataclass
class DayReportRow:
    """Report entry for a single day; `peers` is empty when nothing differs."""

    day: date
    peers: list[PeerReportRow] = field(default_factory=list)

    @property
    def has_difference(self) -> bool:
        return bool(self.peers)

    @property
    def missing_count(self) -> int:
        return sum(len(p.photo_ids) for p in self.peers)


def _peer_rows(missing: dict[Username, PhotoCollection]) -> list[PeerReportRow]:
    rows = [
        PeerReportRow(peer=str(name), photo_ids=[str(p) for p in photos])
        for name, photos in missing.items()
    ]
    rows.sort(key=lambda r: r.peer)
    return rows


class ReportVM:
    """Mediates between `SyncAllPhotosService` and the CLI or GUI views."""

    def __init__(self, service: SyncAllPhotosService) -> None:
        self._service = service
        self.result: CollectionOfMissing = {}
        self.days: list[DayReportRow] = []

    def run(self) -> list[DayReportRow]:
        """Execute the sync pass and rebuild the report rows.

        Raises:
            SyncError: Propagated from the service.
        """
        self.result = self._service.execute()
        self.days = [
            DayReportRow(day=day, peers=_peer_rows(missing)) for day, missing in self.result.items()
        ]
        return self.days

    def render_lines(self) -> list[str]:
        """One line per clean day, one line per peer for days with differences."""
        lines: list[str] = []
        for row in self.days:
            day = format_day(row.day)
            if not row.has_difference:
                lines.append(f"For day: '{day}' no difference have been found.")
                continue
            for peer in row.peers:
                lines.append(
                    f"For day: '{day}', you missing: [{', '.join(peer.photo_ids)}]"
                    f" - we can find it in '{peer.peer}' collection."
                )
        return lines

    def log_report(self) -> None:
        """Write the rendered report through the application logger."""
        for line in self.render_lines():
            logger.info(line)

    @property
    def owner(self) -> str:
        return str(self._service.owner)

    @property
    def day_count(self) -> int:
        return len(self.days)

    @property
    def missing_total(self) -> int:
        return sum(row.missing_count for row in self.days)
