"""
Tier / grade classification
---------------------------
Ten fixed percentile bands, best to worst. Lower-is-better stats are flipped
(100 - percentile) before the band lookup, so a tier always reads "higher is
better".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

from statboard.engine.metrics import MetricDescriptor, stat_value
from statboard.engine.percentiles import percentile, population_values, round_half_up
from statboard.engine.positions import POSITION_CONFIG, group_of


class Tier(Enum):
    #              label        letter  floor  bucket         hex
    ELITE =       ("Elite",      "A+",   90,   "emerald-500", "#10B981")
    GREAT =       ("Great",      "A",    80,   "emerald-400", "#34D399")
    VERY_GOOD =   ("Very Good",  "B+",   70,   "green-400",   "#4ADE80")
    ABOVE_AVG =   ("Above Avg",  "B",    60,   "lime-400",    "#A3E635")
    SOLID =       ("Solid",      "C+",   50,   "amber-300",   "#FCD34D")
    AVERAGE =     ("Average",    "C",    40,   "amber-400",   "#F59E0B")
    BELOW_AVG =   ("Below Avg",  "D+",   30,   "orange-400",  "#FB923C")
    POOR =        ("Poor",       "D",    20,   "orange-500",  "#F97316")
    VERY_POOR =   ("Very Poor",  "F+",   10,   "orange-600",  "#EA580C")
    TERRIBLE =    ("Terrible",   "F",     0,   "red-500",     "#EF4444")

    def __init__(self, label, letter, floor, bucket, color):
        self.label = label
        self.letter = letter
        self.floor = floor
        self.color_bucket = bucket
        self.color = color


# Tier members iterate in declaration order (best first), so the first floor
# that p clears is the band.
_BANDS = tuple(Tier)


@dataclass(frozen=True)
class Grade:
    tier: Tier
    percentile: Optional[float]  # effective (post-inversion); None when no stats were usable

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.name,
            "label": self.tier.label,
            "letter": self.tier.letter,
            "color_bucket": self.tier.color_bucket,
            "color": self.tier.color,
            "percentile": self.percentile,
        }


def tier_for(p: float) -> Tier:
    p = max(0.0, min(100.0, float(p)))
    for tier in _BANDS:
        if p >= tier.floor:
            return tier
    return Tier.TERRIBLE


def grade(pct: float, is_inverted: bool = False) -> Grade:
    p = 100 - pct if is_inverted else pct
    return Grade(tier_for(p), p)


# ============================
# Per-stat cards
# ============================

@dataclass(frozen=True)
class StatCard:
    metric: MetricDescriptor
    value: Optional[float]
    percentile: int          # raw rank (ascending), as displayed next to the value
    grade: Optional[Grade]   # tier after inversion; None when the stat is missing

    def to_dict(self) -> dict:
        return {
            "key": self.metric.key.value,
            "label": self.metric.label,
            "inverted": self.metric.inverted,
            "value": None if self.value is None else round_half_up(self.value, self.metric.precision),
            "percentile": self.percentile,
            "grade": self.grade.to_dict() if self.grade else None,
        }


def stat_cards(entity: Any, metrics: Sequence[MetricDescriptor], population: Iterable[Any]) -> List[StatCard]:
    population = list(population)
    cards = []
    for m in metrics:
        value = stat_value(entity, m.key)
        pct = percentile(value, population_values(population, m.key))
        cards.append(StatCard(m, value, pct, grade(pct, m.inverted) if value is not None else None))
    return cards


# ============================
# Composite grades
# ============================

def composite_grade(entity: Any, metrics: Sequence[MetricDescriptor], population: Iterable[Any]) -> Grade:
    """Average the inversion-adjusted percentiles of every stat the entity has.

    With no usable stat the entity lands in the middle band (Average / C).
    """
    population = list(population)
    adjusted = []
    for m in metrics:
        value = stat_value(entity, m.key)
        if value is None:
            continue
        pct = percentile(value, population_values(population, m.key))
        adjusted.append(100 - pct if m.inverted else pct)

    if not adjusted:
        return Grade(Tier.AVERAGE, None)
    avg = sum(adjusted) / len(adjusted)
    return Grade(tier_for(avg), round_half_up(avg, 1))


def player_composite_grade(player: Any, population: Iterable[Any]) -> Optional[Grade]:
    """Composite over the player's primary stats, ranked against the same group.

    Returns None for players whose position does not resolve to a group.
    """
    group = group_of(player)
    if group is None:
        return None
    peers = [p for p in population if group_of(p) == group]
    return composite_grade(player, POSITION_CONFIG[group].primary, peers)
