"""
Metric descriptors
------------------
Every stat the engine reads is named by `MetricKey`; lists of `MetricDescriptor`
say which stats a view ranks, how they are labelled, and whether a lower raw
value is the better one (`inverted`).

Lookups go through `stat_value(entity, key)` instead of free-form indexing, so a
typo in a key fails at import time rather than silently reading `None`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence


class MetricKey(str, Enum):
    # --- Team: scoring / yardage ---
    OFFENSIVE_PPG = "offensive_ppg"
    DEFENSIVE_PPG = "defensive_ppg"
    OFFENSIVE_YPG = "offensive_ypg"
    DEFENSIVE_YPG = "defensive_ypg"
    # --- Team: efficiency ---
    OFFENSE_EPA_PER_PLAY = "offense_epa_per_play"
    DEFENSE_EPA_PER_PLAY = "defense_epa_per_play"
    OFFENSE_SUCCESS_RATE = "offense_success_rate"
    DEFENSE_SUCCESS_RATE = "defense_success_rate"
    # --- Team: play style ---
    OFFENSE_RUN_PLAY_RATE = "offense_run_play_rate"
    OFFENSE_PASS_PLAY_RATE = "offense_pass_play_rate"
    OFFENSE_MOTION_RATE = "offense_motion_rate"
    OFFENSE_PA_RATE = "offense_pa_rate"
    OFFENSE_NO_HUDDLE_RATE = "offense_no_huddle_rate"
    OFFENSE_SCREEN_RATE = "offense_screen_rate"
    OFFENSE_RPO_RATE = "offense_rpo_rate"
    OFFENSE_QB_OUT_POCKET_RATE = "offense_qb_out_pocket_rate"
    DEFENSE_BLITZ_RATE = "defense_blitz_rate"
    DEFENSE_SACK_RATE = "defense_sack_rate"
    DEFENSE_INT_RATE = "defense_int_rate"
    DEFENSE_IN_THE_BOX_AVG = "defense_in_the_box_avg"
    DEFENSE_PASS_RUSHERS_AVG = "defense_pass_rushers_avg"
    # --- Team: situational ---
    OFFENSE_EPA_PER_PLAY_LATE_DOWN = "offense_epa_per_play_late_down"
    OFFENSE_SUCCESS_RATE_LATE_DOWN = "offense_success_rate_late_down"
    OFFENSE_EPA_PER_PLAY_BLITZ = "offense_epa_per_play_blitz"
    OFFENSE_SUCCESS_RATE_BLITZ = "offense_success_rate_blitz"

    # --- Player: passing ---
    PASSING_YARDS = "passing_yards"
    PASSING_TDS = "passing_tds"
    COMPLETION_PERCENTAGE = "completion_percentage"
    INTERCEPTIONS = "interceptions"
    PASSER_RATING = "passer_rating"
    QBR = "qbr"
    EPA_PER_PLAY = "epa_per_play"
    CPOE = "cpoe"
    ANY_A = "any_a"
    # --- Player: rushing ---
    RUSHING_YARDS = "rushing_yards"
    RUSHING_TDS = "rushing_tds"
    YARDS_PER_CARRY = "yards_per_carry"
    CARRIES = "carries"
    EPA_PER_RUSH = "epa_per_rush"
    RUSH_YARDS_OE_PER_ATT = "rush_yards_oe_per_att"
    RUSH_PCT_OVER_EXPECTED = "rush_pct_over_expected"
    PCT_ATTEMPTS_GTE_EIGHT_DEFENDERS = "percent_attempts_gte_eight_defenders"
    # --- Player: receiving ---
    RECEIVING_YARDS = "receiving_yards"
    RECEPTIONS = "receptions"
    RECEIVING_TDS = "receiving_tds"
    YARDS_PER_TARGET = "yards_per_target"
    EFFICIENCY = "efficiency"
    RACR = "racr"
    WOPR = "wopr"
    YAC_OE = "yac_oe"
    AVG_SEPARATION = "avg_separation"


@dataclass(frozen=True)
class MetricDescriptor:
    """A stat key plus how to show and rank it.

    `inverted` marks stats where lower is better (points allowed, interceptions
    thrown). `family` is "offense", "defense" or None and only affects label text.
    """

    key: MetricKey
    label: str
    inverted: bool = False
    family: Optional[str] = None
    precision: int = 1


def _off(key: MetricKey, label: str, precision: int = 1) -> MetricDescriptor:
    return MetricDescriptor(key, label, inverted=False, family="offense", precision=precision)


def _def(key: MetricKey, label: str, precision: int = 1, inverted: bool = True) -> MetricDescriptor:
    return MetricDescriptor(key, label, inverted=inverted, family="defense", precision=precision)


# ============================
# Team metric lists
# ============================

TEAM_CARD_METRICS = (
    _off(MetricKey.OFFENSIVE_PPG, "Off PPG"),
    _def(MetricKey.DEFENSIVE_PPG, "Def PPG"),
    _off(MetricKey.OFFENSIVE_YPG, "Off YPG"),
    _def(MetricKey.DEFENSIVE_YPG, "Def YPG"),
    _off(MetricKey.OFFENSE_EPA_PER_PLAY, "Off EPA/Play", precision=3),
    _def(MetricKey.DEFENSE_EPA_PER_PLAY, "Def EPA/Play", precision=3),
    _off(MetricKey.OFFENSE_SUCCESS_RATE, "Off Success %"),
    _def(MetricKey.DEFENSE_SUCCESS_RATE, "Def Success %"),
)

TEAM_RADAR_METRICS = (
    _off(MetricKey.OFFENSIVE_PPG, "Off PPG"),
    _def(MetricKey.DEFENSIVE_PPG, "Def PPG"),
    _off(MetricKey.OFFENSE_SUCCESS_RATE, "Off Success %"),
    _def(MetricKey.DEFENSE_SUCCESS_RATE, "Def Success %"),
    _off(MetricKey.OFFENSE_EPA_PER_PLAY, "Off EPA/Play", precision=3),
    _def(MetricKey.DEFENSE_EPA_PER_PLAY, "Def EPA/Play", precision=3),
)

# Axis choices for the team scatter matrix
TEAM_MATRIX_METRICS = (
    _off(MetricKey.OFFENSIVE_PPG, "Offensive PPG"),
    _def(MetricKey.DEFENSIVE_PPG, "Defensive PPG"),
    _off(MetricKey.OFFENSIVE_YPG, "Offensive YPG"),
    _def(MetricKey.DEFENSIVE_YPG, "Defensive YPG"),
    _off(MetricKey.OFFENSE_EPA_PER_PLAY, "Off EPA/Play", precision=3),
    _def(MetricKey.DEFENSE_EPA_PER_PLAY, "Def EPA/Play", precision=3),
    _off(MetricKey.OFFENSE_SUCCESS_RATE, "Off Success Rate"),
    _def(MetricKey.DEFENSE_SUCCESS_RATE, "Def Success Rate"),
    _off(MetricKey.OFFENSE_RUN_PLAY_RATE, "Run Play Rate"),
    _off(MetricKey.OFFENSE_PASS_PLAY_RATE, "Pass Play Rate"),
    _off(MetricKey.OFFENSE_MOTION_RATE, "Motion Rate"),
    _off(MetricKey.OFFENSE_PA_RATE, "Play Action Rate"),
)

TEAM_PLAY_STYLE_METRICS = (
    _off(MetricKey.OFFENSE_RUN_PLAY_RATE, "Run Play Rate"),
    _off(MetricKey.OFFENSE_PASS_PLAY_RATE, "Pass Play Rate"),
    _off(MetricKey.OFFENSE_MOTION_RATE, "Motion Usage"),
    _off(MetricKey.OFFENSE_PA_RATE, "Play Action Rate"),
    _off(MetricKey.OFFENSE_NO_HUDDLE_RATE, "No Huddle Rate"),
    _off(MetricKey.OFFENSE_SCREEN_RATE, "Screen Rate"),
    _off(MetricKey.OFFENSE_RPO_RATE, "RPO Rate"),
    _off(MetricKey.OFFENSE_QB_OUT_POCKET_RATE, "QB Out Pocket Rate"),
    _def(MetricKey.DEFENSE_BLITZ_RATE, "Blitz Rate"),
    # higher is better for the defense on these two
    _def(MetricKey.DEFENSE_SACK_RATE, "Sack Rate", inverted=False),
    _def(MetricKey.DEFENSE_INT_RATE, "Interception Rate", inverted=False),
    _def(MetricKey.DEFENSE_IN_THE_BOX_AVG, "Avg. Players In Box", precision=2),
    _def(MetricKey.DEFENSE_PASS_RUSHERS_AVG, "Avg. Pass Rushers", precision=2),
)

TEAM_SITUATIONAL_METRICS = (
    _off(MetricKey.OFFENSE_EPA_PER_PLAY_LATE_DOWN, "Late Down EPA/Play", precision=3),
    _off(MetricKey.OFFENSE_SUCCESS_RATE_LATE_DOWN, "Late Down Success %"),
    _off(MetricKey.OFFENSE_EPA_PER_PLAY_BLITZ, "vs. Blitz EPA/Play", precision=3),
    _off(MetricKey.OFFENSE_SUCCESS_RATE_BLITZ, "vs. Blitz Success %"),
)

# Landing leaderboards
TEAM_LEADER_METRICS = (
    _off(MetricKey.OFFENSIVE_PPG, "Points Per Game"),
    _def(MetricKey.DEFENSIVE_PPG, "Points Allowed"),
    _off(MetricKey.OFFENSE_EPA_PER_PLAY, "Off EPA/Play", precision=3),
    _def(MetricKey.DEFENSE_EPA_PER_PLAY, "Def EPA/Play", precision=3),
)

def _first_per_key(*lists: Sequence[MetricDescriptor]) -> tuple:
    seen, out = set(), []
    for metrics in lists:
        for m in metrics:
            if m.key not in seen:
                seen.add(m.key)
                out.append(m)
    return tuple(out)


# Every team stat with a descriptor, one entry per key
ALL_TEAM_METRICS = _first_per_key(
    TEAM_CARD_METRICS, TEAM_MATRIX_METRICS, TEAM_PLAY_STYLE_METRICS, TEAM_SITUATIONAL_METRICS
)

# Used when a player comparison mixes position groups
GENERIC_PLAYER_METRICS = (
    MetricDescriptor(MetricKey.EPA_PER_PLAY, "EPA/Play", precision=3),
    MetricDescriptor(MetricKey.EFFICIENCY, "Efficiency"),
)


# ============================
# Lookups
# ============================

def to_number(value: Any) -> Optional[float]:
    """Coerce an upstream stat value to float; None for null, blank or non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        out = float(value)
    elif isinstance(value, str):
        try:
            out = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return out if math.isfinite(out) else None


def _key_name(key) -> str:
    return key.value if isinstance(key, MetricKey) else str(key)


def stat_value(entity: Any, key) -> Optional[float]:
    """Numeric value of `key` on a raw mapping or an enriched entity (via `.raw`)."""
    raw = getattr(entity, "raw", entity)
    if not isinstance(raw, Mapping):
        return None
    return to_number(raw.get(_key_name(key)))


def find_metric(key: Optional[str], choices: Iterable[MetricDescriptor]) -> Optional[MetricDescriptor]:
    """Resolve a request string to one of `choices`, or None."""
    if not key:
        return None
    wanted = key.strip().lower()
    for m in choices:
        if m.key.value == wanted:
            return m
    return None


def describe(metrics: Sequence[MetricDescriptor]) -> list[dict]:
    """Plain-data view of a metric list (for `meta` blocks)."""
    return [
        {"key": m.key.value, "label": m.label, "inverted": m.inverted, "family": m.family}
        for m in metrics
    ]
