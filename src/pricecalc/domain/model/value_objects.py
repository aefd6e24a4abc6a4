"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from pricecalc.domain.exceptions import InvalidInputError

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: str | float | int | Decimal, label: str = "value") -> Decimal:
    """Coerce *value* to a finite Decimal or raise InvalidInputError."""
    if isinstance(value, bool):
        raise InvalidInputError(f"Invalid {label}: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInputError(f"Invalid {label}: {value!r}") from exc
    if not result.is_finite():
        raise InvalidInputError(f"Invalid {label}: {value!r}")
    return result


def round_money(amount: Decimal) -> Decimal:
    """Round to whole cents. Only used at display/serialization boundaries.

    Precision is widened to fit every integer digit plus the cents, so
    large amounts round instead of failing the quantize.
    """
    with localcontext() as ctx:
        if amount.is_finite():
            ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidInputError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < ZERO:
            raise InvalidInputError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${round_money(self.amount):,.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise InvalidInputError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(to_decimal(amount, "money amount"), currency)

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(ZERO, currency)


@dataclass(frozen=True)
class Quantity:
    """A non-negative integer quantity ("units purchased")."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise InvalidInputError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 0:
            raise InvalidInputError(f"Quantity cannot be negative, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Percentage:
    """A rate between 0 and 100 inclusive."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise InvalidInputError(
                f"Percentage must be a Decimal, got {type(self.value).__name__}"
            )
        if not ZERO <= self.value <= HUNDRED:
            raise InvalidInputError(
                f"Percentage must be between 0 and 100, got {self.value}"
            )

    def apply_to(self, amount: Decimal) -> Decimal:
        return amount * self.value / HUNDRED

    @property
    def is_zero(self) -> bool:
        return self.value == ZERO

    def __str__(self) -> str:
        return f"{self.value.normalize():f}%"

    @staticmethod
    def of(value: str | float | int | Decimal) -> Percentage:
        return Percentage(to_decimal(value, "percentage"))

    @staticmethod
    def zero() -> Percentage:
        return Percentage(ZERO)
