import pytest

from statboard.engine.metrics import (
    GENERIC_PLAYER_METRICS,
    TEAM_RADAR_METRICS,
    MetricDescriptor,
    MetricKey,
)
from statboard.engine.positions import PositionGroup, stats_for
from statboard.engine.radar import (
    LEAGUE_AVERAGE,
    normalize_for_radar,
    normalize_value,
    player_radar,
    player_radar_metrics,
)


def _values(row):
    return [v for _, v in row.values]


def test_normalize_value_scales_and_clamps():
    assert normalize_value(25, 20, 30) == 50
    assert normalize_value(25, 20, 30, inverted=True) == 50
    assert normalize_value(20, 20, 30, inverted=True) == 100
    assert normalize_value(0, 18, 30) == 0
    assert normalize_value(45, 18, 30) == 100


def test_constant_metric_sits_at_league_average():
    teams = [{"offensive_ppg": 20}, {"offensive_ppg": 20}, {"offensive_ppg": 20}]
    for inverted in (False, True):
        m = MetricDescriptor(MetricKey.OFFENSIVE_PPG, "Off PPG", inverted=inverted)
        (row,) = normalize_for_radar([m], teams[:2], teams)
        assert _values(row) == [LEAGUE_AVERAGE, LEAGUE_AVERAGE]


def test_metric_absent_from_population_sits_at_league_average():
    m = MetricDescriptor(MetricKey.OFFENSE_RPO_RATE, "RPO Rate")
    (row,) = normalize_for_radar([m], [{"offense_rpo_rate": 4}], [{}, {}])
    assert _values(row) == [50.0]


def test_team_radar(raw_teams):
    kc, car = raw_teams[0], raw_teams[-1]
    rows = {r.metric.key.value: r for r in normalize_for_radar(TEAM_RADAR_METRICS, [kc, car], raw_teams)}
    assert len(rows) == len(TEAM_RADAR_METRICS)
    assert _values(rows["offensive_ppg"]) == [100.0, 0.0]
    # points allowed: KC is the league low, CAR the league high
    assert _values(rows["defensive_ppg"]) == [100.0, 0.0]
    assert all(r.league_average == 50.0 for r in rows.values())


def test_selected_entity_missing_a_value_reads_zero(raw_teams):
    car = raw_teams[-1]
    m = MetricDescriptor(MetricKey.OFFENSE_SUCCESS_RATE, "Off Success %")
    (row,) = normalize_for_radar([m], [car], raw_teams)
    assert _values(row) == [0.0]


def test_missing_lower_is_better_value_sits_at_centre(raw_teams):
    kc = {k: v for k, v in raw_teams[0].items() if k != "defensive_ppg"}
    m = MetricDescriptor(MetricKey.DEFENSIVE_PPG, "Def PPG", inverted=True)
    (row,) = normalize_for_radar([m], [kc], raw_teams)
    assert _values(row) == [0.0]


def test_values_follow_selection_order(raw_teams):
    picked = [raw_teams[3], raw_teams[0]]
    (row,) = normalize_for_radar(TEAM_RADAR_METRICS[:1], picked, raw_teams)
    assert [e["team_abbr"] for e, _ in row.values] == ["NYJ", "KC"]


def test_same_group_players_use_group_stats(raw_players):
    qb1, qb2 = raw_players[0], raw_players[1]
    metrics, group = player_radar_metrics([qb1, qb2])
    assert group is PositionGroup.QB
    assert metrics == stats_for(PositionGroup.QB)

    rows = {r.metric.key.value: r for r in player_radar([qb1, qb2], raw_players)}
    assert _values(rows["passing_yards"])[0] == 100.0
    assert _values(rows["passing_yards"])[1] == pytest.approx(82.35, abs=0.01)
    assert _values(rows["interceptions"]) == [100.0, 75.0]


def test_secondary_stat_set(raw_players):
    metrics, _ = player_radar_metrics(raw_players[:2], "secondary")
    assert metrics == stats_for(PositionGroup.QB, "secondary")


def test_mixed_groups_fall_back_to_generic(raw_players):
    qb1, wr1 = raw_players[0], raw_players[5]
    metrics, group = player_radar_metrics([qb1, wr1])
    assert group is None
    assert metrics == GENERIC_PLAYER_METRICS

    rows = {r.metric.key.value: r for r in player_radar([qb1, wr1], raw_players)}
    assert set(rows) == {"epa_per_play", "efficiency"}
    assert _values(rows["epa_per_play"])[1] == 100.0


def test_ungrouped_player_falls_back_to_generic(raw_players):
    metrics, group = player_radar_metrics([raw_players[-1]])
    assert group is None
    assert metrics == GENERIC_PLAYER_METRICS


def test_row_to_dict(raw_teams):
    (row,) = normalize_for_radar(TEAM_RADAR_METRICS[:1], raw_teams[:1], raw_teams)
    d = row.to_dict(lambda t: {"team": t["team_abbr"]})
    assert d["key"] == "offensive_ppg"
    assert d["league_average"] == 50.0
    assert d["values"] == [{"team": "KC", "value": 100.0}]
