"""
Radar normalization
-------------------
Puts several entities on a common 0-100 scale per metric so they can share one
spider chart. The range is the full population's min..max (not just the
selected entities), a constant metric sits at 50, and inverted metrics are
flipped so "further out" always means "better". League average is fixed at 50.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from statboard.engine.metrics import GENERIC_PLAYER_METRICS, MetricDescriptor, stat_value
from statboard.engine.percentiles import population_values, round_half_up
from statboard.engine.positions import group_of, stats_for

LEAGUE_AVERAGE = 50.0


@dataclass(frozen=True)
class RadarRow:
    metric: MetricDescriptor
    values: List[Tuple[Any, float]] = field(default_factory=list)  # (entity, normalized)
    league_average: float = LEAGUE_AVERAGE

    def to_dict(self, ident: Callable[[Any], dict]) -> dict:
        return {
            "metric": self.metric.label,
            "key": self.metric.key.value,
            "inverted": self.metric.inverted,
            "league_average": self.league_average,
            "values": [{**ident(e), "value": round_half_up(v, 1)} for e, v in self.values],
        }


def normalize_value(value: float, lo: float, hi: float, inverted: bool = False) -> float:
    if hi == lo:
        return LEAGUE_AVERAGE
    scaled = (value - lo) / (hi - lo) * 100
    if inverted:
        scaled = 100 - scaled
    return max(0.0, min(100.0, scaled))


def normalize_for_radar(
    metrics: Sequence[MetricDescriptor],
    selected: Sequence[Any],
    population: Iterable[Any],
) -> List[RadarRow]:
    """One row per metric, one value per selected entity (selection order kept).

    A selected entity without a value for a metric sits at the centre (0),
    whichever way the metric points.
    """
    population = list(population)
    rows = []
    for m in metrics:
        values = population_values(population, m.key)
        lo, hi = (float(values.min()), float(values.max())) if len(values) else (0.0, 0.0)
        row = RadarRow(m)
        for e in selected:
            raw = stat_value(e, m.key)
            if raw is None:
                row.values.append((e, 0.0))
                continue
            row.values.append((e, normalize_value(raw, lo, hi, m.inverted)))
        rows.append(row)
    return rows


def player_radar_metrics(selected: Sequence[Any], stat_set: str = "primary") -> Tuple[Tuple[MetricDescriptor, ...], Any]:
    """Metric list for a player comparison and the group it belongs to.

    Players from one resolved group use that group's list; a mixed or
    unresolved selection falls back to the generic list (group None).
    """
    groups = {group_of(p) for p in selected}
    if len(groups) == 1:
        group = groups.pop()
        if group is not None:
            return stats_for(group, stat_set), group
    return GENERIC_PLAYER_METRICS, None


def player_radar(selected: Sequence[Any], population: Iterable[Any], stat_set: str = "primary") -> List[RadarRow]:
    metrics, group = player_radar_metrics(selected, stat_set)
    population = list(population)
    if group is not None:
        population = [p for p in population if group_of(p) == group]
    return normalize_for_radar(metrics, selected, population)
