"""Image code helpers."""

import random
import re

CODE_PATTERN = re.compile(r"[0-9]{4}")
AUTO_CODE_MIN = 1000
AUTO_CODE_MAX = 9999


def is_valid_code(code: str | None) -> bool:
    """
    Check that a code is exactly four ASCII digits.

    Codes are fixed-width strings, so "0042" is valid and "+123" or "1e03" are not.
    """
    if code is None:
        return False
    return CODE_PATTERN.fullmatch(code) is not None


def generate_code(rng: random.Random | None = None) -> str:
    """Draw a uniformly random code in the range 1000-9999."""
    rng = rng or random
    return f"{rng.randint(AUTO_CODE_MIN, AUTO_CODE_MAX):04d}"
