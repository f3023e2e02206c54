from __future__ import annotations

from collections.abc import Iterable

from PySide6.QtCore import QSortFilterProxyModel, Qt
from PySide6.QtGui import QStandardItem, QStandardItemModel

from app.viewmodels.report_vm import DayReportRow
from app.views.constants import COL_MISSING, COL_NAME, HEADERS, SORT_ROLE
from infrastructure.utils import format_day


def _row(name: str, missing: str, sort_name: str, sort_missing: int) -> list[QStandardItem]:
    items = [QStandardItem(name), QStandardItem(missing)]
    items[COL_NAME].setData(sort_name, SORT_ROLE)
    items[COL_MISSING].setData(sort_missing, SORT_ROLE)
    for it in items:
        it.setEditable(False)
    return items


def build_model(
    days: Iterable[DayReportRow],
) -> tuple[QStandardItemModel, QSortFilterProxyModel]:
    """Builds the day -> peer -> photo tree and a proxy sorting on SORT_ROLE.

    Returns (model, proxy).
    """
    model = QStandardItemModel()
    model.setHorizontalHeaderLabels(HEADERS)

    for d in days:
        day_text = format_day(d.day)
        label = str(d.missing_count) if d.has_difference else "no difference"
        day_row = _row(day_text, label, day_text, d.missing_count)
        model.appendRow(day_row)

        for peer in d.peers:
            count = len(peer.photo_ids)
            peer_row = _row(peer.peer, str(count), peer.peer.lower(), count)
            day_row[COL_NAME].appendRow(peer_row)
            for photo_id in peer.photo_ids:
                peer_row[COL_NAME].appendRow(_row(photo_id, "", photo_id, 0))

    proxy = QSortFilterProxyModel()
    proxy.setSortRole(SORT_ROLE)
    proxy.setSortCaseSensitivity(Qt.CaseInsensitive)
    proxy.setSourceModel(model)

    return model, proxy
