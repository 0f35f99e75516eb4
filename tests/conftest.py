"""
Shared pytest fixtures for CallGuard tests.

Collaborator fakes record calls so tests can assert on order and counts.
"""

import os
from typing import Dict, List, Optional, Tuple

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtCore import QThreadPool  # noqa: E402

from callguard.config import FeatureFlags  # noqa: E402
from callguard.models import BlockingOptionKey, ComponentRef  # noqa: E402


class FakeRegistry:
    def __init__(self, fail: bool = False):
        self.cleared: List[str] = []
        self.fail = fail

    def clear_accounts_for_package(self, package: str) -> None:
        self.cleared.append(package)
        if self.fail:
            raise ConnectionError("account registry unreachable")


class FakeCallScreeningSettings:
    def __init__(self, component: Optional[ComponentRef] = None, fail: bool = False):
        self.component = component
        self.fail = fail
        self.writes: List[Optional[ComponentRef]] = []

    def get_default_call_screening(self) -> Optional[ComponentRef]:
        if self.fail:
            raise ConnectionError("settings store unreachable")
        return self.component

    def set_default_call_screening(self, component: Optional[ComponentRef]) -> None:
        self.writes.append(component)
        self.component = component


class FakeValueStore:
    def __init__(self, values: Optional[Dict[BlockingOptionKey, bool]] = None):
        self.values = dict(values or {})
        self.reads: List[BlockingOptionKey] = []
        self.writes: List[Tuple[BlockingOptionKey, bool]] = []

    def get_blocked_number_setting(self, key: BlockingOptionKey, flags: FeatureFlags) -> bool:
        self.reads.append(key)
        return self.values.get(key, False)

    def set_blocked_number_setting(self, key: BlockingOptionKey, value: bool, flags: FeatureFlags) -> None:
        self.writes.append((key, value))
        self.values[key] = value


class FakeCarrierConfig:
    def __init__(self, show_payphone: bool = True):
        self.show_payphone = show_payphone
        self.queries = 0

    def show_payphone_option(self) -> bool:
        self.queries += 1
        return self.show_payphone


@pytest.fixture
def pool():
    p = QThreadPool()
    yield p
    p.waitForDone(5000)


@pytest.fixture
def value_store() -> FakeValueStore:
    return FakeValueStore()


@pytest.fixture
def carrier() -> FakeCarrierConfig:
    return FakeCarrierConfig()
