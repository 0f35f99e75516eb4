"""
Cleanup after an application is fully removed.

Listens for PACKAGE_FULLY_REMOVED rather than PACKAGE_REMOVED: the latter also
fires when the same package is reinstalled, and accounts of a reinstalled
package must keep their enabled state.

On removal:
- every phone account owned by the package is unregistered
- the default call screening component is cleared if the package owned it

The notification returns at once; the cleanup runs on a Qt thread pool worker
and the pending result is finished exactly once when both actions have been
attempted.
"""

from __future__ import annotations

import threading
from typing import Optional

from PyQt6.QtCore import QRunnable, QThreadPool

from callguard.log import get_logger
from callguard.models import ACTION_PACKAGE_FULLY_REMOVED, PackageBroadcast, RemovalEvent

logger = get_logger(__name__)


class PendingResult:
    """Completion handle for one notification. finish() takes effect once."""

    def __init__(self, label: str = ""):
        self.label = label
        self._lock = threading.Lock()
        self._done = threading.Event()

    def finish(self) -> None:
        with self._lock:
            if self._done.is_set():
                logger.warning("PendingResult %s already finished", self.label)
                return
            self._done.set()
        logger.debug("PendingResult %s finished", self.label)

    @property
    def finished(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)


class _CleanupTask(QRunnable):
    def __init__(self, reconciler: "UninstallReconciler", package: str, result: PendingResult):
        super().__init__()
        self.reconciler = reconciler
        self.package = package
        self.result = result

    def run(self) -> None:
        try:
            self.reconciler.clear_accounts(self.package)
            self.reconciler.clear_default_call_screening(self.package)
        finally:
            self.result.finish()


class UninstallReconciler:
    def __init__(self, registry, settings, pool: Optional[QThreadPool] = None):
        self.registry = registry
        self.settings = settings
        self.pool = pool if pool is not None else QThreadPool.globalInstance()

    def handle(self, event: RemovalEvent) -> PendingResult:
        result = PendingResult(event.package_identifier or "")
        if event.is_empty():
            logger.debug("Removal event without a package; nothing to clean up")
            result.finish()
            return result
        self.pool.start(_CleanupTask(self, event.package_identifier, result))
        return result

    def clear_accounts(self, package: str) -> None:
        try:
            self.registry.clear_accounts_for_package(package)
        except Exception:
            logger.exception("Failed to clear phone accounts for %s", package)

    def clear_default_call_screening(self, package: str) -> None:
        try:
            component = self.settings.get_default_call_screening()
            if component is not None and component.owning_application == package:
                self.settings.set_default_call_screening(None)
                logger.info("Cleared default call screening app %s", component.flatten())
        except Exception:
            logger.exception("Failed to reset default call screening app for %s", package)


class AppUninstallReceiver:
    """Entry point for package broadcasts; only full removals reach cleanup."""

    def __init__(self, reconciler: UninstallReconciler):
        self.reconciler = reconciler

    def on_receive(self, broadcast: PackageBroadcast) -> Optional[PendingResult]:
        if broadcast.action != ACTION_PACKAGE_FULLY_REMOVED:
            return None
        return self.reconciler.handle(RemovalEvent(broadcast.package_name()))
