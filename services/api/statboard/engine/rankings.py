"""
League ranks, leaderboards and qualification
--------------------------------------------
Ordinal companions to the percentile engine:

- `league_rank`: "N of M" place of one entity on one stat. Ties share the best
  place (competition ranking); an entity without a value is ranked after every
  entity that has one.
- `leaders`: top-N entities on a stat, best first; entities without a value
  never appear.
- `qualifies`: small-sample cut for player rankings. A player must clear the
  group's key-stat floor and the snap floor; a few passing rate stats also need
  a minimum number of attempts. Missing snap / attempt counts do not
  disqualify.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from statboard.engine.metrics import MetricDescriptor, MetricKey, stat_value
from statboard.engine.percentiles import round_half_up
from statboard.engine.positions import PositionGroup, group_of

MIN_SNAP_THRESHOLD = 200
MIN_PASS_ATTEMPTS = 50

# key-stat floor per group (strictly above)
QUALIFYING_FLOORS = {
    PositionGroup.QB: (MetricKey.PASSING_YARDS, 1000),
    PositionGroup.RB: (MetricKey.RUSHING_YARDS, 500),
    PositionGroup.WR: (MetricKey.RECEIVING_YARDS, 500),
    PositionGroup.TE: (MetricKey.RECEIVING_YARDS, 300),
}

# QB rate stats that also need MIN_PASS_ATTEMPTS
PASS_ATTEMPT_METRICS = frozenset({MetricKey.COMPLETION_PERCENTAGE, MetricKey.QBR})


@dataclass(frozen=True)
class LeagueRank:
    metric: MetricDescriptor
    rank: int
    total: int
    value: Optional[float]

    def to_dict(self) -> dict:
        return {
            "key": self.metric.key.value,
            "label": self.metric.label,
            "inverted": self.metric.inverted,
            "rank": self.rank,
            "total": self.total,
        }


def _better(a: float, b: float, inverted: bool) -> bool:
    return a < b if inverted else a > b


def league_rank(entity: Any, metric: MetricDescriptor, population: Iterable[Any]) -> LeagueRank:
    population = list(population)
    values = [v for v in (stat_value(e, metric.key) for e in population) if v is not None]
    mine = stat_value(entity, metric.key)
    if mine is None:
        rank = len(values) + 1
    else:
        rank = 1 + sum(1 for v in values if _better(v, mine, metric.inverted))
    return LeagueRank(metric, rank, len(population), mine)


def league_ranks(entity: Any, metrics: Iterable[MetricDescriptor], population: Iterable[Any]) -> List[LeagueRank]:
    population = list(population)
    return [league_rank(entity, m, population) for m in metrics]


@dataclass(frozen=True)
class Leader:
    rank: int
    entity: Any
    value: float

    def to_dict(self, ident, precision: int = 1) -> dict:
        return {"rank": self.rank, **ident(self.entity), "value": round_half_up(self.value, precision)}


def leaders(population: Iterable[Any], metric: MetricDescriptor, n: int = 5) -> List[Leader]:
    """Top `n` by `metric`, best first; equal values keep population order."""
    scored = [(stat_value(e, metric.key), e) for e in population]
    scored = [(v, e) for v, e in scored if v is not None]
    scored.sort(key=lambda ve: ve[0], reverse=not metric.inverted)
    return [Leader(i + 1, e, v) for i, (v, e) in enumerate(scored[:max(0, n)])]


def qualifies(player: Any, metric: Optional[MetricDescriptor] = None) -> bool:
    group = group_of(player)
    if group is None:
        return False

    key, floor = QUALIFYING_FLOORS[group]
    value = stat_value(player, key)
    if value is None or value <= floor:
        return False

    snaps = stat_value(player, "snaps_played")
    if snaps is not None and snaps < MIN_SNAP_THRESHOLD:
        return False

    if group is PositionGroup.QB and metric is not None and metric.key in PASS_ATTEMPT_METRICS:
        attempts = stat_value(player, "passing_attempts")
        if attempts is not None and attempts < MIN_PASS_ATTEMPTS:
            return False
    return True
