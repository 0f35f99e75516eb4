"""
Phone account registry.

Keeps the registered calling accounts per owning package in accounts.json.
Only what the uninstall path needs is modeled: register, list, and clear all
accounts of a package. Enabled state is stored per account and survives a
reinstall because nothing clears it on a plain package update.
"""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Union

from callguard.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PhoneAccount:
    package: str
    account_id: str
    label: str = ""
    enabled: bool = False


class PhoneAccountRegistry:
    def __init__(self, base_dir: Union[str, Path]):
        self.path = Path(base_dir) / "accounts.json"
        self._lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write([])

    def _read(self) -> List[Dict]:
        data = json.loads(self.path.read_text())
        return data if isinstance(data, list) else []

    def _write(self, accounts: List[Dict]) -> None:
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(accounts, indent=2))
        tmp.replace(self.path)

    def register_account(self, account: PhoneAccount) -> None:
        with self._lock:
            accounts = [
                a for a in self._read()
                if (a.get("package"), a.get("account_id")) != (account.package, account.account_id)
            ]
            accounts.append(asdict(account))
            self._write(accounts)

    def get_accounts(self, package: str | None = None) -> List[PhoneAccount]:
        with self._lock:
            raw = self._read()
        accounts = [PhoneAccount(**a) for a in raw]
        if package is None:
            return accounts
        return [a for a in accounts if a.package == package]

    def clear_accounts_for_package(self, package: str) -> None:
        """Unregister every account owned by package. No-op if it has none."""
        with self._lock:
            accounts = self._read()
            kept = [a for a in accounts if a.get("package") != package]
            removed = len(accounts) - len(kept)
            if removed:
                self._write(kept)
        logger.info("Cleared %d account(s) for %s", removed, package)
