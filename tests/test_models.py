import pytest

from callguard.models import (
    ACTION_PACKAGE_FULLY_REMOVED,
    BlockingOptionKey,
    ComponentRef,
    PackageBroadcast,
    RemovalEvent,
)


@pytest.mark.parametrize("value, expected", [
    ("com.a/com.a.Screener", ComponentRef("com.a", "com.a.Screener")),
    ("com.a/.Screener", ComponentRef("com.a", "com.a.Screener")),
    ("com.a", None),
    ("/Screener", None),
    ("", None),
    (None, None),
])
def test_unflatten(value, expected):
    assert ComponentRef.unflatten(value) == expected


def test_package_name_from_broadcast():
    b = PackageBroadcast.fully_removed("com.example.dialer")
    assert b.action == ACTION_PACKAGE_FULLY_REMOVED
    assert b.package_name() == "com.example.dialer"
    assert PackageBroadcast(ACTION_PACKAGE_FULLY_REMOVED, None).package_name() is None
    assert PackageBroadcast(ACTION_PACKAGE_FULLY_REMOVED, "file:/x").package_name() is None


def test_removal_event_empty():
    assert RemovalEvent("").is_empty()
    assert RemovalEvent(None).is_empty()
    assert not RemovalEvent("com.a").is_empty()


def test_blocking_option_keys():
    assert BlockingOptionKey.from_key("block_unknown_calls_setting") is BlockingOptionKey.UNKNOWN
    assert len({k.key for k in BlockingOptionKey}) == 5
