"""
Head-to-head comparison of exactly two entities.

Each metric's percentage is relative to its own magnitude:
|a - b| / max(|a|, |b|, 1) * 100, so the floor of 1 keeps tiny or zero
values from blowing up.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

from statboard.engine.metrics import MetricDescriptor, stat_value
from statboard.engine.percentiles import round_half_up


@dataclass(frozen=True)
class HeadToHeadRow:
    metric: MetricDescriptor
    value_a: float
    value_b: float
    diff: float
    percent_diff: float
    a_better: bool

    @property
    def leader(self) -> str:
        if self.diff == 0:
            return "even"
        return "a" if self.a_better else "b"

    def to_dict(self) -> dict:
        return {
            "metric": self.metric.label,
            "key": self.metric.key.value,
            "inverted": self.metric.inverted,
            "value_a": self.value_a,
            "value_b": self.value_b,
            "diff": self.diff,
            "abs_diff": abs(self.diff),
            "percent_diff": round_half_up(self.percent_diff, 1),
            "leader": self.leader,
        }


def head_to_head(metrics: Sequence[MetricDescriptor], entity_a: Any, entity_b: Any) -> List[HeadToHeadRow]:
    rows = []
    for m in metrics:
        a = stat_value(entity_a, m.key) or 0.0
        b = stat_value(entity_b, m.key) or 0.0
        diff = a - b
        better = diff < 0 if m.inverted else diff > 0
        pct = abs(diff) / max(abs(a), abs(b), 1) * 100
        rows.append(HeadToHeadRow(m, a, b, diff, pct, better))
    return rows
