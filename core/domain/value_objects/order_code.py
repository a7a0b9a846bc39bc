"""Order code value object."""
import random
import re
import secrets
import string
from dataclasses import dataclass
from typing import Optional


ORDER_CODE_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{6}$")

_LETTERS = string.ascii_uppercase
_DIGITS_LOW = 100000
_DIGITS_HIGH = 999999

# The code doubles as the tracking access key, so draw from the OS source.
_system_random = secrets.SystemRandom()


@dataclass(frozen=True)
class OrderCode:
    """
    Public, human-typeable order identifier.

    Format: two uppercase letters followed by six digits, first digit
    non-zero (e.g. ``AB123456``). Uniqueness is NOT guaranteed here; the
    orders table enforces it and placement retries on collision.
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order code cannot be empty")

        if not ORDER_CODE_PATTERN.match(self.value):
            raise ValueError(
                f"Invalid order code format (expected AA999999): {self.value}"
            )

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls, rng: Optional[random.Random] = None) -> "OrderCode":
        """
        Draw a fresh candidate code.

        Args:
            rng: Optional random source (tests pass a seeded ``random.Random``)

        Returns:
            New OrderCode, not yet checked for uniqueness
        """
        source = rng or _system_random
        letters = source.choice(_LETTERS) + source.choice(_LETTERS)
        digits = source.randint(_DIGITS_LOW, _DIGITS_HIGH)
        return cls(value=f"{letters}{digits}")

    @staticmethod
    def normalize(raw: str) -> str:
        """Trim whitespace and uppercase user-typed input."""
        return (raw or "").strip().upper()

    @staticmethod
    def is_well_formed(raw: str) -> bool:
        return bool(ORDER_CODE_PATTERN.match(raw or ""))
