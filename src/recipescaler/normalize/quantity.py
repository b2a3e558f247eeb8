"""Free-text quantity parsing and ingredient name normalization."""

import re
from collections.abc import Callable
from dataclasses import dataclass
from fractions import Fraction

from recipescaler.logging_config import get_logger

logger = get_logger(__name__)


# =============================================================================
# Quantity Grammar
# =============================================================================

# Unicode vulgar fractions as they appear in copied recipe text
VULGAR_FRACTIONS: dict[str, str] = {
    "½": "1/2",
    "⅓": "1/3",
    "⅔": "2/3",
    "¼": "1/4",
    "¾": "3/4",
    "⅕": "1/5",
    "⅖": "2/5",
    "⅗": "3/5",
    "⅘": "4/5",
    "⅙": "1/6",
    "⅚": "5/6",
    "⅛": "1/8",
    "⅜": "3/8",
    "⅝": "5/8",
    "⅞": "7/8",
}

FRACTION_SLASH = "⁄"


@dataclass(frozen=True)
class Quantity:
    """A parsed quantity: exact non-negative amount plus a normalized unit."""

    amount: Fraction
    unit: str = ""

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Quantity amount cannot be negative: {self.amount}")


@dataclass(frozen=True)
class GrammarRule:
    """One rule of the quantity grammar: a pattern and how to build an amount from it."""

    name: str
    pattern: re.Pattern[str]
    build_amount: Callable[[re.Match[str]], Fraction]


def _mixed_fraction_amount(match: re.Match[str]) -> Fraction:
    whole = int(match.group("whole") or 0)
    return whole + Fraction(int(match.group("numerator")), int(match.group("denominator")))


def _decimal_amount(match: re.Match[str]) -> Fraction:
    return Fraction(match.group("number").rstrip("."))


MIXED_FRACTION_RULE = GrammarRule(
    name="mixed_fraction",
    pattern=re.compile(
        r"^(?:(?P<whole>\d+)\s+)?(?P<numerator>\d+)\s*/\s*(?P<denominator>\d+)(?P<unit>.*)$",
        re.DOTALL,
    ),
    build_amount=_mixed_fraction_amount,
)

DECIMAL_RULE = GrammarRule(
    name="decimal",
    pattern=re.compile(r"^(?P<number>\d+(?:\.\d*)?|\.\d+)(?P<unit>.*)$", re.DOTALL),
    build_amount=_decimal_amount,
)

# Order matters: "1 1/2 cups" must never be read as 1 with unit "1/2 cups"
QUANTITY_GRAMMAR: tuple[GrammarRule, ...] = (MIXED_FRACTION_RULE, DECIMAL_RULE)


# =============================================================================
# Normalization Helpers
# =============================================================================


def replace_vulgar_fractions(text: str) -> str:
    """
    Rewrite unicode fractions into ASCII form.

    Examples:
        "1½ cups" -> "1 1/2 cups"
        "¾ tsp" -> "3/4 tsp"
    """
    for symbol, ascii_form in VULGAR_FRACTIONS.items():
        text = text.replace(symbol, f" {ascii_form}")
    return text.replace(FRACTION_SLASH, "/")


def normalize_unit(unit: str) -> str:
    """Lowercase a unit and collapse its whitespace."""
    return " ".join(unit.split()).lower()


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name for consolidation.

    Only case and whitespace are normalized; synonyms and descriptors are kept.
    """
    if not name:
        return ""
    return " ".join(name.split()).lower()


# =============================================================================
# Parser
# =============================================================================


class QuantityParser:
    """
    Parses raw quantity text into a Quantity.

    Rules are tried in order and the first one whose pattern matches decides
    the result. Text that no rule matches is unparsable and yields None.
    """

    def __init__(self, rules: tuple[GrammarRule, ...] = QUANTITY_GRAMMAR):
        self.rules = rules

    def parse(self, text: str | None) -> Quantity | None:
        """Parse quantity text, returning None when it cannot be parsed."""
        if not text:
            return None

        cleaned = " ".join(replace_vulgar_fractions(text).split())
        if not cleaned:
            return None

        for rule in self.rules:
            match = rule.pattern.match(cleaned)
            if not match:
                continue

            try:
                amount = rule.build_amount(match)
            except ZeroDivisionError:
                logger.debug(f"Zero denominator in quantity {text!r}")
                return None
            except ValueError:
                # Integer literal longer than the interpreter converts from text
                logger.debug(f"Numeric literal too long in quantity {text[:40]!r}")
                return None

            return Quantity(amount=amount, unit=normalize_unit(match.group("unit")))

        return None


_default_parser = QuantityParser()


def parse_quantity(text: str | None) -> Quantity | None:
    """
    Parse a quantity string into an amount and unit.

    Handles formats like:
    - "3" (no unit)
    - "2.5 oz"
    - "1/2 tsp"
    - "1 1/2 cups"
    - "1½ cups"

    Returns None for empty text or text without a leading number.
    """
    return _default_parser.parse(text)
