"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

HEADERS: list[str] = [
    "Day / Peer / Photo",
    "Missing",
]

COL_NAME: int = 0
COL_MISSING: int = 1
NUM_COLUMNS: int = 2


# Data roles
SORT_ROLE: int = Qt.UserRole + 1  # used by QSortFilterProxyModel


WINDOW_TITLE: str = "Photo Reconcile"
DEFAULT_WINDOW_SIZE: tuple[int, int] = (900, 600)
