import json

from callguard.config import (
    COMBINE_RESTRICTED_AND_UNKNOWN,
    SHOW_NOT_IN_CONTACTS_OPTION,
    CarrierConfig,
    DeviceConfig,
    FeatureFlags,
)


def test_device_config_defaults(tmp_path):
    config = DeviceConfig.load(tmp_path)
    assert config.get_bool(SHOW_NOT_IN_CONTACTS_OPTION) is True
    assert config.get_bool(COMBINE_RESTRICTED_AND_UNKNOWN) is False
    assert config.get_bool("no_such_flag") is False


def test_device_config_from_file(tmp_path):
    (tmp_path / "device_config.json").write_text(json.dumps({COMBINE_RESTRICTED_AND_UNKNOWN: True}))
    assert DeviceConfig.load(tmp_path).get_bool(COMBINE_RESTRICTED_AND_UNKNOWN) is True


def test_device_config_ignores_bad_file(tmp_path):
    (tmp_path / "device_config.json").write_text("[1, 2")
    assert DeviceConfig.load(tmp_path).get_bool(SHOW_NOT_IN_CONTACTS_OPTION) is True


def test_carrier_config_is_reread_on_each_query(tmp_path):
    path = tmp_path / "carrier_config.json"
    carrier = CarrierConfig.load(tmp_path)
    assert carrier.show_payphone_option() is False

    path.write_text(json.dumps({
        "default_voice_subscription_id": 2,
        "subscriptions": {"2": {"show_blocking_pay_phone_option_bool": True}},
    }))
    assert carrier.show_payphone_option() is True

    path.write_text(json.dumps({
        "default_voice_subscription_id": 3,
        "subscriptions": {"2": {"show_blocking_pay_phone_option_bool": True}},
    }))
    assert carrier.show_payphone_option() is False


def test_feature_flags_load(tmp_path):
    assert FeatureFlags.load(tmp_path).enhanced_call_blocking is True
    (tmp_path / "feature_flags.json").write_text(json.dumps({"enhanced_call_blocking": False, "other": 1}))
    assert FeatureFlags.load(tmp_path).enhanced_call_blocking is False
