"""
Enhanced call blocking settings.

The screen holds one switch per BlockingOptionKey. Device configuration may
combine "private" and/or "unavailable" into "unknown": the combined switches
are removed and the unknown switch writes all of them. Combining is decided
once per session; pay phone visibility follows the carrier and is re-checked
on every resume.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional

from callguard.config import (
    COMBINE_RESTRICTED_AND_UNKNOWN,
    COMBINE_UNAVAILABLE_AND_UNKNOWN,
    SHOW_NOT_IN_CONTACTS_OPTION,
    FeatureFlags,
)
from callguard.log import get_logger
from callguard.models import TITLES, BlockingOptionKey

logger = get_logger(__name__)

ChangeListener = Callable[["SwitchPreference", bool], bool]


class SwitchPreference:
    def __init__(self, key: BlockingOptionKey, title: str = ""):
        self.key = key
        self.title = title or TITLES[key]
        self.checked = False
        self.on_change: Optional[ChangeListener] = None

    def request_change(self, value: bool) -> bool:
        """User flipped the switch. Keeps the new state only if the listener accepts it."""
        if self.on_change is not None and not self.on_change(self, value):
            return False
        self.checked = value
        return True


class PreferenceScreen:
    """Ordered set of switches; removed switches are gone for the session."""

    def __init__(self, preferences: Optional[List[SwitchPreference]] = None):
        self._prefs: Dict[BlockingOptionKey, SwitchPreference] = {}
        for pref in preferences or []:
            self._prefs[pref.key] = pref

    @classmethod
    def enhanced_call_blocking(cls) -> "PreferenceScreen":
        return cls([SwitchPreference(k) for k in BlockingOptionKey])

    def find_preference(self, key: BlockingOptionKey) -> Optional[SwitchPreference]:
        return self._prefs.get(key)

    def remove_preference(self, key: BlockingOptionKey) -> bool:
        return self._prefs.pop(key, None) is not None

    def __contains__(self, key: BlockingOptionKey) -> bool:
        return key in self._prefs

    def __iter__(self) -> Iterator[SwitchPreference]:
        return iter(list(self._prefs.values()))

    def keys(self) -> List[BlockingOptionKey]:
        return list(self._prefs)


@dataclass(frozen=True)
class CombinedOptions:
    show_not_in_contacts: bool = True
    restricted_into_unknown: bool = False
    unavailable_into_unknown: bool = False

    @classmethod
    def from_device_config(cls, device_config) -> "CombinedOptions":
        return cls(
            show_not_in_contacts=device_config.get_bool(SHOW_NOT_IN_CONTACTS_OPTION),
            restricted_into_unknown=device_config.get_bool(COMBINE_RESTRICTED_AND_UNKNOWN),
            unavailable_into_unknown=device_config.get_bool(COMBINE_UNAVAILABLE_AND_UNKNOWN),
        )

    def removed_keys(self) -> List[BlockingOptionKey]:
        removed = []
        if not self.show_not_in_contacts:
            removed.append(BlockingOptionKey.NOT_REGISTERED)
        if self.restricted_into_unknown:
            removed.append(BlockingOptionKey.PRIVATE)
        if self.unavailable_into_unknown:
            removed.append(BlockingOptionKey.UNAVAILABLE)
        return removed

    def fan_out(self, key: BlockingOptionKey) -> List[BlockingOptionKey]:
        """Keys written for a change of key, combined ones first."""
        keys = []
        if key is BlockingOptionKey.UNKNOWN:
            if self.restricted_into_unknown:
                keys.append(BlockingOptionKey.PRIVATE)
            if self.unavailable_into_unknown:
                keys.append(BlockingOptionKey.UNAVAILABLE)
        keys.append(key)
        return keys


class EnhancedCallBlockingController:
    def __init__(self, store, device_config, carrier_config, feature_flags: Optional[FeatureFlags] = None,
                 screen: Optional[PreferenceScreen] = None):
        self.store = store
        self.device_config = device_config
        self.carrier_config = carrier_config
        self.feature_flags = feature_flags or FeatureFlags()
        self.screen = screen if screen is not None else PreferenceScreen.enhanced_call_blocking()
        self.options: Optional[CombinedOptions] = None

    def on_create(self) -> None:
        self.options = CombinedOptions.from_device_config(self.device_config)
        for key in self.options.removed_keys():
            if self.screen.remove_preference(key):
                logger.info("onCreate: removed %s preference.", key.key)

        for pref in self.screen:
            pref.on_change = self.on_preference_change

        if not self.carrier_config.show_payphone_option():
            if self.screen.remove_preference(BlockingOptionKey.PAYPHONE):
                logger.info("onCreate: removed %s preference.", BlockingOptionKey.PAYPHONE.key)

    def on_resume(self) -> None:
        show_payphone = self.carrier_config.show_payphone_option()
        for pref in self.screen:
            if pref.key is BlockingOptionKey.PAYPHONE and not show_payphone:
                continue
            pref.checked = self.store.get_blocked_number_setting(pref.key, self.feature_flags)

    def on_preference_change(self, pref: SwitchPreference, value: bool) -> bool:
        if self.options is None:
            raise RuntimeError("on_create() must run before preference changes")
        value = bool(value)
        for key in self.options.fan_out(pref.key):
            if key is not pref.key:
                logger.info("onPreferenceChange: changing %s and %s to %s", pref.key.key, key.key, value)
            self.store.set_blocked_number_setting(key, value, self.feature_flags)
        return True
