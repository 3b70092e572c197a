"""
Quadrant classification
-----------------------
Splits a scatter matrix into four performance profiles by comparing each point
to the axis averages. Comparisons are strict: a point sitting exactly on the
average is on the unfavourable side. For an inverted y metric "favourable"
means below the average.

Averages come from the same entities the matrix plots (per position group when
groups are mixed on one plot). Percentiles shown next to each point are ranked
against the full population.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, NamedTuple, Optional

from statboard.engine.metrics import MetricDescriptor, stat_value
from statboard.engine.percentiles import league_average, percentile, population_values
from statboard.engine.positions import POSITION_CONFIG, group_of


class QuadrantLabels(NamedTuple):
    both: str      # favourable on x and y
    x_only: str
    y_only: str
    neither: str


PLAYER_QUADRANT_LABELS = QuadrantLabels("Elite", "Established", "Emerging", "Developing")

QUADRANT_COLORS = {
    "Elite": "#10B981",
    "Emerging": "#A3E635",
    "Established": "#F59E0B",
    "Developing": "#F97316",
}


def team_quadrant_labels(x_metric: MetricDescriptor, y_metric: MetricDescriptor) -> QuadrantLabels:
    return QuadrantLabels(
        both="Elite",
        x_only="Offensive-Focused" if x_metric.family == "offense" else "Mixed Strengths",
        y_only="Defensive-Focused" if y_metric.family == "defense" else "Mixed Weaknesses",
        neither="Below Average",
    )


def quadrant(
    x: float,
    y: float,
    x_average: float,
    y_average: float,
    y_inverted: bool = False,
    labels: QuadrantLabels = PLAYER_QUADRANT_LABELS,
) -> str:
    x_good = x > x_average
    y_good = y < y_average if y_inverted else y > y_average
    if x_good and y_good:
        return labels.both
    if x_good:
        return labels.x_only
    if y_good:
        return labels.y_only
    return labels.neither


@dataclass(frozen=True)
class MatrixPoint:
    entity: Any
    x: float
    y: float
    x_percentile: int
    y_percentile: int
    label: str
    group: Optional[Hashable] = None

    def to_dict(self, ident: Callable[[Any], dict]) -> dict:
        out = {
            **ident(self.entity),
            "x": self.x,
            "y": self.y,
            "x_percentile": self.x_percentile,
            "y_percentile": self.y_percentile,
            "quadrant": self.label,
            "quadrant_color": QUADRANT_COLORS.get(self.label),
        }
        if self.group is not None:
            out["group"] = getattr(self.group, "value", self.group)
        return out


def quadrant_matrix(
    entities: Iterable[Any],
    x_metric: MetricDescriptor,
    y_metric: MetricDescriptor,
    population: Iterable[Any],
    labels: QuadrantLabels = PLAYER_QUADRANT_LABELS,
) -> tuple[List[MatrixPoint], Dict[str, float]]:
    """Classify every entity on one x/y pair.

    Returns the points and the averages used ({"x": .., "y": ..}).
    Missing coordinates plot at 0.
    """
    entities = list(entities)
    population = list(population)
    x_avg = league_average(entities, x_metric.key)
    y_avg = league_average(entities, y_metric.key)
    x_pop = population_values(population, x_metric.key)
    y_pop = population_values(population, y_metric.key)

    points = []
    for e in entities:
        x = stat_value(e, x_metric.key) or 0.0
        y = stat_value(e, y_metric.key) or 0.0
        points.append(MatrixPoint(
            entity=e,
            x=x,
            y=y,
            x_percentile=percentile(x, x_pop),
            y_percentile=percentile(y, y_pop),
            label=quadrant(x, y, x_avg, y_avg, y_metric.inverted, labels),
        ))
    return points, {"x": x_avg, "y": y_avg}


def team_matrix(teams, x_metric: MetricDescriptor, y_metric: MetricDescriptor, population):
    return quadrant_matrix(teams, x_metric, y_metric, population, team_quadrant_labels(x_metric, y_metric))


def player_matrix(players, population) -> tuple[List[MatrixPoint], Dict[str, dict]]:
    """Per-group matrices on each group's first two primary stats.

    Players without a group are skipped. Averages are per group; percentiles
    rank against that group inside the full population.
    """
    players = list(players)
    population = list(population)
    points: List[MatrixPoint] = []
    meta: Dict[str, dict] = {}
    for group, cfg in POSITION_CONFIG.items():
        members = [p for p in players if group_of(p) == group]
        if not members:
            continue
        peers = [p for p in population if group_of(p) == group]
        x_metric, y_metric = cfg.primary[0], cfg.primary[1]
        group_points, averages = quadrant_matrix(members, x_metric, y_metric, peers, PLAYER_QUADRANT_LABELS)
        points.extend(
            MatrixPoint(p.entity, p.x, p.y, p.x_percentile, p.y_percentile, p.label, group)
            for p in group_points
        )
        meta[group.value] = {
            "x_metric": x_metric.key.value,
            "y_metric": y_metric.key.value,
            "x_label": x_metric.label,
            "y_label": y_metric.label,
            "average_x": averages["x"],
            "average_y": averages["y"],
            "color": cfg.color,
        }
    return points, meta
