from __future__ import annotations

import argparse
from pathlib import Path
import sys

from loguru import logger

from app.viewmodels.report_vm import ReportVM
from core.services.interfaces import SyncError
from core.services.sync_service import SyncAllPhotosService
from infrastructure.fs_photo_provider import DEFAULT_PHOTOS_ROOT, FsPhotoProvider
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings


BASE_DIR = Path(__file__).parent
DEFAULT_OWNER = "My"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Report photos other people have for a day that you do not."
    )
    parser.add_argument("owner", nargs="?", help=f"Your folder name (default: {DEFAULT_OWNER})")
    parser.add_argument(
        "path", nargs="?", help=f"Root of the day/user tree (default: {DEFAULT_PHOTOS_ROOT})"
    )
    parser.add_argument("--settings", help="Path to a settings.json file")
    parser.add_argument("--workers", type=int, help="Threads used to reconcile days")
    parser.add_argument("--log-level", help="Console/file log level (default: INFO)")
    parser.add_argument("--log-dir", help="Also write rotating log files here")
    parser.add_argument("--gui", action="store_true", help="Show the report in a window")
    return parser


def _load_settings(explicit: str | None) -> JsonSettings:
    # An explicit --settings path must exist; the bundled default is optional
    if explicit:
        return JsonSettings(explicit)
    return JsonSettings(BASE_DIR / "settings.json", required=False)


def _run_gui(vm: ReportVM) -> int:
    from PySide6.QtWidgets import QApplication  # pylint: disable=import-outside-toplevel

    from app.views.report_window import ReportWindow  # pylint: disable=import-outside-toplevel

    app = QApplication(sys.argv)
    win = ReportWindow(vm)
    win.refresh_tree()
    win.show()
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _load_settings(args.settings)

    init_logging(
        level=args.log_level or str(settings.get("logging.level") or "INFO"),
        log_dir=args.log_dir or settings.get("logging.dir"),
    )

    owner = args.owner or str(settings.get("owner", DEFAULT_OWNER))
    photos_root = args.path or str(settings.get("photos_root", DEFAULT_PHOTOS_ROOT))
    workers = args.workers if args.workers is not None else settings.get("sync.max_workers", 1)

    provider = FsPhotoProvider.from_settings(photos_root, settings)
    service = SyncAllPhotosService(owner, provider, max_workers=int(workers or 1))
    vm = ReportVM(service)

    try:
        vm.run()
    except SyncError as ex:
        logger.error("Something unexpected happen - {}", ex)
        return 1

    if args.gui:
        return _run_gui(vm)

    vm.log_report()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
