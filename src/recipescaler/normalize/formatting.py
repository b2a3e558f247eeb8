"""Rendering of scaled amounts as human-readable cooking fractions."""

import math
import numbers
from fractions import Fraction

from recipescaler.config import get_settings
from recipescaler.errors import InvalidAmountError

# Upper bound on continued-fraction terms; rounded amounts converge long before this
MAX_EXPANSION_TERMS = 64

# Digits per chunk when rendering integers beyond the interpreter's str() limit
_DIGIT_CHUNK = 1000


def int_to_text(number: int) -> str:
    """Decimal digits of an integer of any size."""
    try:
        return str(number)
    except ValueError:
        # Exceeds sys.get_int_max_str_digits(); render in fixed-width chunks
        sign = "-" if number < 0 else ""
        number = abs(number)
        base = 10**_DIGIT_CHUNK
        chunks = []
        while number:
            number, chunk = divmod(number, base)
            chunks.append(chunk)
        head, *rest = reversed(chunks)
        return sign + str(head) + "".join(f"{chunk:0{_DIGIT_CHUNK}d}" for chunk in rest)


class FractionFormatter:
    """
    Formats amounts as mixed fractions, e.g. 3.5 -> "3 1/2".

    Amounts are rounded first to suppress floating noise from repeated
    multiplication, then approximated by a continued-fraction expansion.
    A convergent is accepted once it is within the relative tolerance of the
    rounded value, or within the precision already given up by rounding, so
    0.33 renders as "1/3" rather than "33/100". Fractions that still come out
    long fall back to the rounded decimal.

    All arithmetic is exact, so amounts too large for a float still format.
    """

    def __init__(
        self,
        decimals: int | None = None,
        tolerance: float | None = None,
        max_length: int | None = None,
    ):
        settings = get_settings()
        self.decimals = settings.rounding_decimals if decimals is None else decimals
        self.tolerance = settings.fraction_tolerance if tolerance is None else tolerance
        self.max_length = settings.fraction_max_length if max_length is None else max_length

    @property
    def rounding_slack(self) -> Fraction:
        """Half of the last decimal place kept by rounding."""
        return Fraction(1, 2 * 10**self.decimals) + Fraction(1, 10**9)

    def format(self, amount: numbers.Real, unit: str = "") -> str:
        """Format an amount and unit for display."""
        value = self.validate(amount)
        rounded = round(value, self.decimals)
        unit = (unit or "").strip()

        if rounded.denominator == 1:
            text = int_to_text(rounded.numerator)
        else:
            fraction = self.to_fraction_string(rounded)
            text = fraction if len(fraction) < self.max_length else self.format_decimal(rounded)

        return f"{text} {unit}".strip()

    def validate(self, amount: numbers.Real) -> Fraction:
        """Return the amount as an exact Fraction, rejecting negative and non-finite values."""
        if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
            raise InvalidAmountError(amount)
        if isinstance(amount, numbers.Rational):
            value = Fraction(amount.numerator, amount.denominator)
        else:
            if not math.isfinite(amount):
                raise InvalidAmountError(amount)
            value = Fraction(float(amount))
        if value < 0:
            raise InvalidAmountError(amount)
        return value

    def to_fraction_string(self, value: numbers.Real) -> str:
        """
        Approximate a decimal with a small-denominator fraction.

        Whole numbers are returned as integers and improper fractions are
        split into a whole part and a proper remainder.
        """
        value = Fraction(value)
        if value.denominator == 1:
            return int_to_text(value.numerator)

        numerator, denominator = self.continued_fraction(value)

        if numerator >= denominator:
            whole, remainder = divmod(numerator, denominator)
            if remainder == 0:
                return int_to_text(whole)
            return f"{int_to_text(whole)} {remainder}/{denominator}"

        return f"{numerator}/{denominator}"

    def continued_fraction(self, value: numbers.Real) -> tuple[int, int]:
        """Find the first convergent of value within tolerance."""
        value = Fraction(value)
        tolerance = max(value * Fraction(self.tolerance), self.rounding_slack)
        h1, h2, k1, k2 = 1, 0, 0, 1
        b = value

        for _ in range(MAX_EXPANSION_TERMS):
            a = math.floor(b)
            h1, h2 = a * h1 + h2, h1
            k1, k2 = a * k1 + k2, k1

            if abs(value - Fraction(h1, k1)) <= tolerance:
                break

            remainder = b - a
            if remainder == 0:
                break
            b = 1 / remainder

        return h1, k1

    def format_decimal(self, value: numbers.Real) -> str:
        """Format a decimal without trailing zeros."""
        scale = 10**self.decimals
        whole, digits = divmod(round(Fraction(value) * scale), scale)
        if not self.decimals:
            return int_to_text(whole)
        return f"{int_to_text(whole)}.{digits:0{self.decimals}d}".rstrip("0").rstrip(".")


def format_quantity(amount: numbers.Real, unit: str = "") -> str:
    """
    Format a scaled amount for display.

    Examples:
        format_quantity(1.5, "cups") -> "1 1/2 cups"
        format_quantity(2, "cups") -> "2 cups"
        format_quantity(0.333333, "cup") -> "1/3 cup"
    """
    return FractionFormatter().format(amount, unit)


def decimal_to_fraction(value: numbers.Real) -> str:
    """Convert a decimal to its fraction string without a unit."""
    formatter = FractionFormatter()
    return formatter.to_fraction_string(formatter.validate(value))
