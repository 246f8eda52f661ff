"""
Tests for request field validation and log masking.
"""

from labtracka_core.logs import mask_value
from labtracka_core.validation import any_value_empty, is_email, is_password_valid


class TestValidation:

    def test_any_value_empty(self):
        assert any_value_empty("a", "") is True
        assert any_value_empty("a", "b") is False
        assert any_value_empty() is False

    def test_is_email(self):
        assert is_email("a@x.com") is True
        assert is_email("first.last+tag@sub.example.org") is True
        assert is_email("no-at-sign") is False
        assert is_email("a@x.com\n") is False
        assert is_email("a" * 250 + "@x.com") is False

    def test_password_policy(self):
        assert is_password_valid("Passw0rd!") is True
        assert is_password_valid("short1!") is False
        assert is_password_valid("alllowercase1!") is False
        assert is_password_valid("NoDigitsHere!") is False
        assert is_password_valid("NoSpecial123") is False
        assert is_password_valid("Aa1!" * 20) is False


class TestMaskValue:

    def test_masks_email(self):
        assert mask_value("patient@labtracka.test") == "p***@labtracka.test"

    def test_masks_device_id(self):
        assert mask_value("device-123") == "dev***"

    def test_short_and_empty(self):
        assert mask_value("ab") == "**"
        assert mask_value("") == ""
