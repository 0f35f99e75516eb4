"""
Value types shared by the uninstall reconciler and the call blocking settings.

- RemovalEvent: one "package fully removed" notification, consumed once.
- ComponentRef: owning application + handler id, stored as "pkg/handler".
- BlockingOptionKey: the five enhanced call blocking toggles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ACTION_PACKAGE_FULLY_REMOVED = "android.intent.action.PACKAGE_FULLY_REMOVED"
# Also fires on reinstall; never routed to cleanup.
ACTION_PACKAGE_REMOVED = "android.intent.action.PACKAGE_REMOVED"

PACKAGE_SCHEME = "package"


@dataclass(frozen=True)
class RemovalEvent:
    package_identifier: Optional[str]

    def is_empty(self) -> bool:
        return not self.package_identifier


@dataclass(frozen=True)
class PackageBroadcast:
    action: str
    data: Optional[str] = None  # "package:com.example.dialer"

    def package_name(self) -> Optional[str]:
        """Return the scheme-specific part of the data URI, if any."""
        if self.data is None:
            return None
        scheme, sep, rest = self.data.partition(":")
        if not sep:
            return self.data
        if scheme != PACKAGE_SCHEME:
            return None
        return rest

    @classmethod
    def fully_removed(cls, package: str) -> "PackageBroadcast":
        return cls(ACTION_PACKAGE_FULLY_REMOVED, f"{PACKAGE_SCHEME}:{package}")


@dataclass(frozen=True)
class ComponentRef:
    owning_application: str
    handler_id: str

    def flatten(self) -> str:
        return f"{self.owning_application}/{self.handler_id}"

    @classmethod
    def unflatten(cls, value: Optional[str]) -> Optional["ComponentRef"]:
        """Parse "pkg/handler"; a handler starting with "." is relative to pkg."""
        if not value:
            return None
        pkg, sep, handler = value.partition("/")
        if not sep or not pkg or not handler:
            return None
        if handler.startswith("."):
            handler = pkg + handler
        return cls(pkg, handler)


class BlockingOptionKey(Enum):
    NOT_REGISTERED = "block_numbers_not_in_contacts_setting"
    PRIVATE = "block_private_number_calls_setting"
    PAYPHONE = "block_payphone_calls_setting"
    UNKNOWN = "block_unknown_calls_setting"
    UNAVAILABLE = "block_unavailable_calls_setting"

    @property
    def key(self) -> str:
        return self.value

    @classmethod
    def from_key(cls, key: str) -> "BlockingOptionKey":
        return cls(key)


TITLES = {
    BlockingOptionKey.NOT_REGISTERED: "Unknown (not in contacts)",
    BlockingOptionKey.PRIVATE: "Private",
    BlockingOptionKey.PAYPHONE: "Pay phone",
    BlockingOptionKey.UNKNOWN: "Unknown",
    BlockingOptionKey.UNAVAILABLE: "Unavailable",
}
