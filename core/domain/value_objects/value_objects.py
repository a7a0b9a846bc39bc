"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID, uuid4


CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value with currency.

    Storefront prices are whole rupees in practice, but amounts are kept
    as two-place Decimals so totals survive the database round-trip.

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal
    currency: str = "PKR"

    def __post_init__(self):
        # Convert to Decimal if needed
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        object.__setattr__(
            self, 'amount', self.amount.quantize(CENTS, rounding=ROUND_HALF_UP)
        )

        # Validate currency code (3 letters)
        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def __add__(self, other: 'Money') -> 'Money':
        """Add two Money objects (must have same currency)."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot add different currencies: {self.currency} vs {other.currency}"
            )
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        """Subtract two Money objects (must have same currency)."""
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot subtract different currencies: {self.currency} vs {other.currency}"
            )
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def times(self, quantity: int) -> 'Money':
        """Multiply by an integer quantity (line totals)."""
        return Money(amount=self.amount * quantity, currency=self.currency)

    @classmethod
    def zero(cls, currency: str = "PKR") -> 'Money':
        return cls(amount=Decimal("0"), currency=currency)

    def is_negative(self) -> bool:
        """Check if amount is negative."""
        return self.amount < 0


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)
