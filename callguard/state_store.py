"""
Persisted settings for CallGuard.

Stores the default call screening component and the enhanced call blocking
switches. Data lives in the user's OS-specific application data directory
(see callguard.config.resolve_app_data_dir).
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Dict, Optional, Union

from callguard.config import FeatureFlags, resolve_app_data_dir
from callguard.log import get_logger
from callguard.models import BlockingOptionKey, ComponentRef

logger = get_logger(__name__)

CALL_SCREENING_DEFAULT_COMPONENT = "call_screening_default_component"
BLOCKED_NUMBER_SETTINGS = "blocked_number_settings"


def _defaults() -> Dict:
    return {
        CALL_SCREENING_DEFAULT_COMPONENT: None,
        BLOCKED_NUMBER_SETTINGS: {},
    }


class FeatureDisabledError(RuntimeError):
    """Raised when writing a blocking setting while the feature is gated off."""


class StateStore:
    """Simple JSON-backed settings store.

    Schema:
    {
        "call_screening_default_component": Optional[str],  # "pkg/handler"
        "blocked_number_settings": Dict[str, bool],
    }

    The reconciler touches this from a worker thread, so load/modify/save
    cycles are serialized with a lock.
    """

    def __init__(self, base_dir: Union[str, Path, None] = None):
        self.app_dir = Path(base_dir) if base_dir is not None else resolve_app_data_dir()
        self.state_path = self.app_dir / "settings.json"
        self._lock = threading.RLock()
        self.app_dir.mkdir(parents=True, exist_ok=True)
        if not self.state_path.exists():
            self._write_state(_defaults())

    def _write_state(self, data: Dict) -> None:
        tmp = self.state_path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, indent=2))
        tmp.replace(self.state_path)

    def load(self) -> Dict:
        with self._lock:
            try:
                data = json.loads(self.state_path.read_text())
                if not isinstance(data, dict):
                    raise ValueError("settings root is not an object")
            except (OSError, ValueError):
                logger.warning("Settings file %s unreadable, resetting to defaults", self.state_path)
                data = _defaults()
                self._write_state(data)
                return data
            data.setdefault(CALL_SCREENING_DEFAULT_COMPONENT, None)
            data.setdefault(BLOCKED_NUMBER_SETTINGS, {})
            return data

    def save(self, data: Dict) -> None:
        with self._lock:
            self._write_state(data)

    # Default call screening component
    def get_default_call_screening(self) -> Optional[ComponentRef]:
        return ComponentRef.unflatten(self.load().get(CALL_SCREENING_DEFAULT_COMPONENT))

    def set_default_call_screening(self, component: Optional[ComponentRef]) -> None:
        with self._lock:
            state = self.load()
            state[CALL_SCREENING_DEFAULT_COMPONENT] = component.flatten() if component else None
            self.save(state)

    # Enhanced call blocking
    def get_blocked_number_setting(self, key: BlockingOptionKey, flags: FeatureFlags) -> bool:
        if not flags.enhanced_call_blocking:
            return False
        return bool(self.load()[BLOCKED_NUMBER_SETTINGS].get(key.key, False))

    def set_blocked_number_setting(self, key: BlockingOptionKey, value: bool, flags: FeatureFlags) -> None:
        if not flags.enhanced_call_blocking:
            raise FeatureDisabledError(f"enhanced call blocking is disabled; cannot set {key.key}")
        with self._lock:
            state = self.load()
            state[BLOCKED_NUMBER_SETTINGS][key.key] = bool(value)
            self.save(state)
