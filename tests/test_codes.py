"""Tests for code validation and generation."""

import random

import pytest

from codestore.utils.codes import generate_code, is_valid_code


class TestIsValidCode:
    """Tests for is_valid_code."""

    @pytest.mark.parametrize("code", ["0000", "0007", "1234", "9999"])
    def test_accepts_four_digits(self, code: str) -> None:
        assert is_valid_code(code) is True

    @pytest.mark.parametrize(
        "code",
        ["", "123", "12345", "12a4", "+123", "1e03", " 123", "123\n", "１２３４", "-123", "12.3"],
    )
    def test_rejects_everything_else(self, code: str) -> None:
        assert is_valid_code(code) is False

    def test_rejects_none(self) -> None:
        assert is_valid_code(None) is False


class TestGenerateCode:
    """Tests for generate_code."""

    def test_codes_are_four_digits_in_range(self) -> None:
        rng = random.Random(42)
        for _ in range(500):
            code = generate_code(rng)
            assert is_valid_code(code)
            assert "1000" <= code <= "9999"

    def test_seeded_generation_is_repeatable(self) -> None:
        first = [generate_code(random.Random(7)) for _ in range(3)]
        second = [generate_code(random.Random(7)) for _ in range(3)]
        assert first == second
