"""Read-only window presenting the missing-photos report as a tree."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHeaderView, QMainWindow, QMenuBar, QMessageBox, QTreeView
from loguru import logger

from app.viewmodels.report_vm import ReportVM
from app.views.constants import COL_NAME, DEFAULT_WINDOW_SIZE, WINDOW_TITLE
from app.views.tree_model_builder import build_model
from core.services.interfaces import SyncError


class ReportWindow(QMainWindow):
    """Shows day -> peer -> photo rows and lets the user re-run the scan."""

    def __init__(self, vm: ReportVM) -> None:
        super().__init__()
        self._vm = vm
        self._model = None
        self._proxy = None

        self.tree = QTreeView()
        self.tree.setUniformRowHeights(True)
        self.tree.setSortingEnabled(True)
        self.tree.header().setSectionResizeMode(QHeaderView.Interactive)
        self.setCentralWidget(self.tree)

        menubar = QMenuBar(self)
        file_menu = menubar.addMenu("File")
        self.action_refresh = file_menu.addAction("Rescan")
        file_menu.addSeparator()
        self.action_exit = file_menu.addAction("Exit")
        self.setMenuBar(menubar)
        self.action_refresh.triggered.connect(self.rescan)
        self.action_exit.triggered.connect(self.close)

        self.setWindowTitle(f"{WINDOW_TITLE} - {vm.owner}")
        self.resize(*DEFAULT_WINDOW_SIZE)

    def refresh_tree(self) -> None:
        """Rebuild the tree from the view-model's current report rows."""
        self._model, self._proxy = build_model(self._vm.days)
        self.tree.setModel(self._proxy)
        self.tree.sortByColumn(COL_NAME, Qt.AscendingOrder)
        self.tree.resizeColumnToContents(COL_NAME)
        self.statusBar().showMessage(
            f"{self._vm.day_count} day(s), {self._vm.missing_total} missing photo(s)"
        )

    def rescan(self) -> None:
        """Re-run the sync pass; failures are shown, the old tree is kept."""
        try:
            self._vm.run()
        except SyncError as ex:
            logger.error("Rescan failed: {}", ex)
            QMessageBox.critical(self, WINDOW_TITLE, str(ex))
            return
        self.refresh_tree()
