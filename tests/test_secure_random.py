"""
Tests for the secure random helpers.
"""

import secrets

import pytest

from labtracka_core.otp import TokenGenerationError, random_bytes, random_code, random_hex_token


class TestRandomCode:

    def test_code_has_exact_length(self):
        """Codes are always exactly the requested number of digits."""
        for _ in range(200):
            code = random_code(4)
            assert len(code) == 4
            assert code.isdigit()

    def test_long_codes(self):
        code = random_code(12)
        assert len(code) == 12
        assert code.isdigit()

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            random_code(0)

    def test_entropy_failure_propagates(self, monkeypatch):
        """An OS entropy error surfaces as TokenGenerationError."""
        def broken(_):
            raise OSError("no entropy")

        monkeypatch.setattr(secrets, "randbelow", broken)

        with pytest.raises(TokenGenerationError):
            random_code(4)


class TestRandomHexToken:

    def test_hex_token_length(self):
        token = random_hex_token(16)
        assert len(token) == 32
        int(token, 16)

    def test_tokens_are_unique(self):
        tokens = {random_hex_token(32) for _ in range(100)}
        assert len(tokens) == 100

    def test_random_bytes_length(self):
        assert len(random_bytes(24)) == 24
