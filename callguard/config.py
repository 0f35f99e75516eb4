"""
Device, carrier and feature-flag configuration for CallGuard.

Configuration lives as small JSON files in the OS-specific application data
directory, next to the persisted settings:
- device_config.json: build-time resource booleans (read once per session)
- carrier_config.json: per-subscription carrier values (re-read on demand)
- feature_flags.json: platform feature gates passed through to the store
Missing or unreadable files fall back to defaults.
"""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from callguard.log import get_logger

logger = get_logger(__name__)

APP_NAME = "CallGuard"

SHOW_NOT_IN_CONTACTS_OPTION = "show_option_to_block_callers_not_in_contacts"
COMBINE_RESTRICTED_AND_UNKNOWN = "combine_options_to_block_restricted_and_unknown_callers"
COMBINE_UNAVAILABLE_AND_UNKNOWN = "combine_options_to_block_unavailable_and_unknown_callers"

DEVICE_DEFAULTS = {
    SHOW_NOT_IN_CONTACTS_OPTION: True,
    COMBINE_RESTRICTED_AND_UNKNOWN: False,
    COMBINE_UNAVAILABLE_AND_UNKNOWN: False,
}

KEY_SHOW_BLOCKING_PAY_PHONE_OPTION_BOOL = "show_blocking_pay_phone_option_bool"


def resolve_app_data_dir(app_name: str = APP_NAME) -> Path:
    system = platform.system().lower()
    if system == "darwin":  # macOS
        return Path.home() / "Library" / "Application Support" / app_name
    elif system == "windows":
        base = os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming")
        return Path(base) / app_name
    else:  # linux/other
        return Path.home() / f".{app_name.lower()}"


def _read_json(path: Path) -> Optional[Dict[str, Any]]:
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("Ignoring unreadable config file %s", path)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected an object", path)
        return None
    return data


class DeviceConfig:
    """Read-only boolean resources, e.g. which blocking options are combined."""

    def __init__(self, values: Optional[Dict[str, bool]] = None):
        self._values = dict(DEVICE_DEFAULTS)
        if values:
            self._values.update({k: bool(v) for k, v in values.items()})

    @classmethod
    def load(cls, base_dir: Union[str, Path]) -> "DeviceConfig":
        return cls(_read_json(Path(base_dir) / "device_config.json"))

    def get_bool(self, name: str) -> bool:
        return bool(self._values.get(name, False))


class CarrierConfig:
    """Carrier values for the default voice subscription.

    Re-reads its file on every query; carrier config can change while a
    settings session is open.
    """

    def __init__(self, path: Union[str, Path, None] = None, values: Optional[Dict[str, Any]] = None):
        self.path = Path(path) if path is not None else None
        self._values = values

    @classmethod
    def load(cls, base_dir: Union[str, Path]) -> "CarrierConfig":
        return cls(path=Path(base_dir) / "carrier_config.json")

    def _config_for_default_voice_sub(self) -> Optional[Dict[str, Any]]:
        data = self._values
        if data is None and self.path is not None:
            data = _read_json(self.path)
        if not data:
            return None
        sub_id = data.get("default_voice_subscription_id")
        subs = data.get("subscriptions")
        if sub_id is None or not isinstance(subs, dict):
            return None
        bundle = subs.get(str(sub_id))
        return bundle if isinstance(bundle, dict) else None

    def show_payphone_option(self) -> bool:
        bundle = self._config_for_default_voice_sub()
        if bundle is None:
            return False
        return bool(bundle.get(KEY_SHOW_BLOCKING_PAY_PHONE_OPTION_BOOL, False))


@dataclass(frozen=True)
class FeatureFlags:
    enhanced_call_blocking: bool = True

    @classmethod
    def load(cls, base_dir: Union[str, Path]) -> "FeatureFlags":
        data = _read_json(Path(base_dir) / "feature_flags.json") or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})
