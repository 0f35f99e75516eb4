"""
CallGuard - call blocking settings and uninstall cleanup for telephony apps.

Entry point:
- no command: boots the PyQt6 enhanced call blocking window
- remove <package>: delivers a "package fully removed" notification and waits
  for the cleanup to finish
"""

from __future__ import annotations

import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import QThreadPool

from callguard.accounts import PhoneAccountRegistry
from callguard.blocking_settings import EnhancedCallBlockingController
from callguard.config import APP_NAME, CarrierConfig, DeviceConfig, FeatureFlags, resolve_app_data_dir
from callguard.log import get_logger, setup_logging
from callguard.models import PackageBroadcast
from callguard.state_store import StateStore
from callguard.uninstall_receiver import AppUninstallReceiver, UninstallReconciler

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="callguard", description=__doc__.strip().splitlines()[0])
    parser.add_argument("--data-dir", type=Path, default=None, help="settings directory")
    parser.add_argument("--log-level", default=os.environ.get("CALLGUARD_LOG_LEVEL", "INFO"))
    parser.add_argument("--log-file", default=None)
    sub = parser.add_subparsers(dest="command")
    remove = sub.add_parser("remove", help="simulate a full uninstall of a package")
    remove.add_argument("package")
    return parser


def run_remove(data_dir: Path, package: str) -> int:
    pool = QThreadPool()
    reconciler = UninstallReconciler(PhoneAccountRegistry(data_dir), StateStore(data_dir), pool=pool)
    result = AppUninstallReceiver(reconciler).on_receive(PackageBroadcast.fully_removed(package))
    pool.waitForDone()
    if result is None or not result.finished:
        logger.error("Cleanup for %s did not complete", package)
        return 1
    logger.info("Cleanup for %s complete", package)
    return 0


def run_settings(data_dir: Path) -> int:
    from PyQt6.QtWidgets import QApplication, QMessageBox

    from callguard.ui import CallBlockingWindow

    def excepthook(type_, value, tb):
        msg = "".join(traceback.format_exception(type_, value, tb))
        logger.critical(msg)
        try:
            QMessageBox.critical(None, "Unexpected Error", msg)
        except Exception:
            logger.exception("Could not show error dialog")

    sys.excepthook = excepthook
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)

    controller = EnhancedCallBlockingController(
        StateStore(data_dir),
        DeviceConfig.load(data_dir),
        CarrierConfig.load(data_dir),
        FeatureFlags.load(data_dir),
    )
    window = CallBlockingWindow(controller)
    window.show()
    return app.exec()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    data_dir = args.data_dir or resolve_app_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    if args.command == "remove":
        return run_remove(data_dir, args.package)
    return run_settings(data_dir)


if __name__ == "__main__":
    sys.exit(main())
