"""Percentile ranking and league averages."""

import pytest

from statboard.engine.metrics import MetricKey
from statboard.engine.percentiles import (
    clean_population,
    league_averages,
    percentile,
    population_values,
    round_half_up,
)

PPG = [18, 22, 25, 25, 30]


def test_first_value_at_or_above_subject_sets_the_rank():
    # index 2 of 5
    assert percentile(25, PPG) == 40


def test_population_maximum_ranks_100():
    assert percentile(30, PPG) == 100
    assert percentile(45, PPG) == 100


def test_minimum_edge_never_reads_zero():
    assert percentile(18, PPG) == 20
    assert percentile(3, PPG) == 20


def test_single_value_population():
    assert percentile(5, [5]) == 100
    assert percentile(4, [5]) == 0


@pytest.mark.parametrize("value", [None, "n/a", "", float("nan")])
def test_non_numeric_subject_is_zero(value):
    assert percentile(value, PPG) == 0


@pytest.mark.parametrize("population", [[], [None, None], ["x", "", None]])
def test_empty_population_is_zero(population):
    assert percentile(25, population) == 0


def test_population_is_cleaned_before_ranking():
    assert percentile("25", ["18", 22, None, "n/a", 25, "25", 30]) == 40


def test_halves_round_up():
    assert round_half_up(12.5) == 13
    assert round_half_up(-0.5) == 0
    assert percentile(2, list(range(1, 9))) == 13


@pytest.mark.parametrize("x, ndigits, expected", [(11.25, 1, 11.3), (0.125, 2, 0.13), (24.75, 1, 24.8), (0.6667, 3, 0.667)])
def test_half_up_with_digits(x, ndigits, expected):
    assert round_half_up(x, ndigits) == expected


def test_bounds_and_monotonic():
    pop = [3.1, -2, 7, 7, 7, 0, 15.5, 9, 1]
    previous = -1
    for i in range(-10, 40):
        value = i / 2
        p = percentile(value, pop)
        assert 0 <= p <= 100
        assert p >= previous
        previous = p


def test_every_member_ranks_inside_bounds():
    pop = [4, 8, 15, 16, 23, 42]
    assert all(0 < percentile(v, pop) <= 100 for v in pop)
    assert percentile(max(pop), pop) == 100


def test_population_not_mutated():
    pop = [30, 18, 25, 22, 25]
    percentile(25, pop)
    assert pop == [30, 18, 25, 22, 25]


def test_population_values_reads_stats(raw_teams):
    values = population_values(raw_teams, MetricKey.OFFENSE_SUCCESS_RATE)
    assert sorted(values.tolist()) == [41.0, 44.0, 47.0, 48.0]


def test_clean_population_drops_non_numeric():
    assert clean_population([1, "2", None, "x", True, 3.5]).tolist() == [1.0, 2.0, 3.5]


def test_league_averages(raw_teams):
    avgs = league_averages(raw_teams, [MetricKey.OFFENSIVE_PPG, MetricKey.OFFENSE_SUCCESS_RATE])
    assert avgs["offensive_ppg"] == pytest.approx(24.0)
    assert avgs["offense_success_rate"] == pytest.approx(45.0)


def test_league_average_of_missing_stat_is_zero(raw_teams):
    assert league_averages(raw_teams, [MetricKey.OFFENSE_RPO_RATE]) == {"offense_rpo_rate": 0.0}
