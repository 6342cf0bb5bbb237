"""Score borders for range queries over sorted sets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Infinity(IntEnum):
    """Whether a border is unbounded, and in which direction."""

    NEGATIVE = -1
    NONE = 0
    POSITIVE = 1


@dataclass(frozen=True)
class ScoreBorder:
    """A bound such as ``2``, ``(2`` (exclusive), ``+inf`` or ``-inf``."""

    inf: Infinity = Infinity.NONE
    value: float = 0.0
    exclude: bool = False

    def greater(self, value: float) -> bool:
        """Return whether ``value`` lies within this border used as an upper bound."""
        if self.inf == Infinity.NEGATIVE:
            return False
        if self.inf == Infinity.POSITIVE:
            return True
        if self.exclude:
            return self.value > value
        return self.value >= value

    def less(self, value: float) -> bool:
        """Return whether ``value`` lies within this border used as a lower bound."""
        if self.inf == Infinity.NEGATIVE:
            return True
        if self.inf == Infinity.POSITIVE:
            return False
        if self.exclude:
            return self.value < value
        return self.value <= value


POSITIVE_INF_BORDER = ScoreBorder(inf=Infinity.POSITIVE)
NEGATIVE_INF_BORDER = ScoreBorder(inf=Infinity.NEGATIVE)

_NOT_A_FLOAT = "ERR min or max is not a float"


def _parse_float(text: str) -> float:
    if not text or text != text.strip() or "_" in text:
        raise ValueError(_NOT_A_FLOAT)
    try:
        return float(text)
    except ValueError:
        raise ValueError(_NOT_A_FLOAT) from None


def parse_score_border(s: str) -> ScoreBorder:
    """Parse a ``min``/``max`` argument of a score range command."""
    if s in ("inf", "+inf"):
        return POSITIVE_INF_BORDER
    if s == "-inf":
        return NEGATIVE_INF_BORDER
    if s.startswith("("):
        return ScoreBorder(value=_parse_float(s[1:]), exclude=True)
    return ScoreBorder(value=_parse_float(s), exclude=False)