"""
Position groups
---------------
Raw roster position codes collapse to a small closed set of groups; each group
owns its primary and secondary stat lists and a display color. Players whose
code does not map (K, LS, OL, defense...) get no group and stay out of every
group-specific ranking.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from statboard.engine.metrics import MetricDescriptor, MetricKey, stat_value

M = MetricDescriptor
K = MetricKey


class PositionGroup(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"


_CODE_TO_GROUP = {
    "QB": PositionGroup.QB,
    "RB": PositionGroup.RB,
    "FB": PositionGroup.RB,
    "HB": PositionGroup.RB,
    "WR": PositionGroup.WR,
    "TE": PositionGroup.TE,
}

# Display priority for the initial player sort; unmapped codes go last.
GROUP_PRIORITY = {
    PositionGroup.QB: 1,
    PositionGroup.RB: 2,
    PositionGroup.WR: 3,
    PositionGroup.TE: 4,
}
_UNGROUPED_PRIORITY = 99

UNGROUPED_COLOR = "#718096"

STAT_SETS = ("primary", "secondary")


@dataclass(frozen=True)
class PositionConfig:
    primary: Tuple[MetricDescriptor, ...]
    secondary: Tuple[MetricDescriptor, ...]
    color: str

    @property
    def key_stat(self) -> MetricDescriptor:
        return self.primary[0]


_RECEIVER_PRIMARY = (
    M(K.RECEIVING_YARDS, "Receiving Yards", precision=0),
    M(K.RECEPTIONS, "Receptions", precision=0),
    M(K.RECEIVING_TDS, "Receiving TDs", precision=0),
    M(K.YARDS_PER_TARGET, "Yards/Target"),
)

POSITION_CONFIG = {
    PositionGroup.QB: PositionConfig(
        primary=(
            M(K.PASSING_YARDS, "Passing Yards", precision=0),
            M(K.PASSING_TDS, "Passing TDs", precision=0),
            M(K.COMPLETION_PERCENTAGE, "Completion %"),
            M(K.INTERCEPTIONS, "Interceptions", inverted=True, precision=0),
        ),
        secondary=(
            M(K.PASSER_RATING, "Passer Rating"),
            M(K.QBR, "QBR"),
            M(K.EPA_PER_PLAY, "EPA/Play", precision=3),
            M(K.CPOE, "CPOE"),
            M(K.ANY_A, "ANY/A", precision=2),
        ),
        color="#4299E1",
    ),
    PositionGroup.RB: PositionConfig(
        primary=(
            M(K.RUSHING_YARDS, "Rushing Yards", precision=0),
            M(K.RUSHING_TDS, "Rushing TDs", precision=0),
            M(K.YARDS_PER_CARRY, "Yds/Carry"),
            M(K.CARRIES, "Carries", precision=0),
        ),
        secondary=(
            M(K.EPA_PER_RUSH, "EPA/Rush", precision=3),
            M(K.RUSH_YARDS_OE_PER_ATT, "Yards Over Expected/Att", precision=2),
            M(K.RUSH_PCT_OVER_EXPECTED, "Rush % Over Expected"),
            M(K.PCT_ATTEMPTS_GTE_EIGHT_DEFENDERS, "% vs 8+ Defenders"),
        ),
        color="#48BB78",
    ),
    PositionGroup.WR: PositionConfig(
        primary=_RECEIVER_PRIMARY,
        secondary=(
            M(K.EFFICIENCY, "Efficiency"),
            M(K.RACR, "RACR", precision=2),
            M(K.WOPR, "WOPR", precision=2),
            M(K.YAC_OE, "YAC Over Expected"),
            M(K.AVG_SEPARATION, "Avg Separation"),
        ),
        color="#F6AD55",
    ),
    PositionGroup.TE: PositionConfig(
        primary=_RECEIVER_PRIMARY,
        secondary=(
            M(K.EFFICIENCY, "Efficiency"),
            M(K.RACR, "RACR", precision=2),
            M(K.WOPR, "WOPR", precision=2),
            M(K.YAC_OE, "YAC Over Expected"),
        ),
        color="#9F7AEA",
    ),
}


def resolve_group(code: Optional[str]) -> Optional[PositionGroup]:
    if not isinstance(code, str):
        return None
    return _CODE_TO_GROUP.get(code.strip().upper())


def group_of(entity: Any) -> Optional[PositionGroup]:
    """Group of a tagged player (`.group`) or of a raw mapping's `position`."""
    if hasattr(entity, "group"):
        return entity.group
    if isinstance(entity, Mapping):
        return resolve_group(entity.get("position"))
    return None


def position_color(code: Optional[str]) -> str:
    group = resolve_group(code)
    return POSITION_CONFIG[group].color if group else UNGROUPED_COLOR


def stats_for(group: Optional[PositionGroup], stat_set: str = "primary") -> Tuple[MetricDescriptor, ...]:
    """Ordered stat list of a group; empty for an unresolved group."""
    if group is None:
        return ()
    cfg = POSITION_CONFIG[group]
    return cfg.secondary if stat_set == "secondary" else cfg.primary


def _name_of(entity: Any) -> str:
    name = getattr(entity, "name", None)
    if name is None and isinstance(entity, Mapping):
        name = entity.get("name")
    return name or ""


def _sort_key(entity: Any):
    group = group_of(entity)
    priority = GROUP_PRIORITY.get(group, _UNGROUPED_PRIORITY)
    key_stat = 0.0
    if group is not None:
        key_stat = stat_value(entity, POSITION_CONFIG[group].key_stat.key) or 0.0
    # key stat descending, then name ascending
    return (priority, -key_stat, _name_of(entity))


def sort_players_by_position(players: Iterable[Any]) -> List[Any]:
    """Initial roster order: group priority, key stat (desc), then name."""
    return sorted(players, key=_sort_key)
