from callguard.accounts import PhoneAccount, PhoneAccountRegistry
from callguard.models import ComponentRef
from callguard.state_store import StateStore
from main import main


def test_remove_command_cleans_up_package(tmp_path):
    registry = PhoneAccountRegistry(tmp_path)
    registry.register_account(PhoneAccount("com.example.voip", "a1"))
    registry.register_account(PhoneAccount("com.other.sip", "b1"))
    StateStore(tmp_path).set_default_call_screening(ComponentRef("com.example.voip", ".Screener"))

    assert main(["--data-dir", str(tmp_path), "remove", "com.example.voip"]) == 0

    assert [a.package for a in registry.get_accounts()] == ["com.other.sip"]
    assert StateStore(tmp_path).get_default_call_screening() is None
