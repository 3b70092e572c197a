"""
Pytest fixtures: small team / player / game populations and a FastAPI client
whose upstream stats API is replaced by those fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from statboard import upstream
from statboard.main import create_app


# ============================================================================
# POPULATIONS
# ============================================================================

@pytest.fixture
def raw_teams():
    """Five teams; offensive_ppg is [18, 22, 25, 25, 30] in league order."""
    return [
        {"team_abbr": "KC", "team_name": "Kansas City Chiefs", "offensive_ppg": 30,
         "defensive_ppg": 17.5, "offensive_ypg": 390, "defensive_ypg": 310,
         "offense_epa_per_play": 0.15, "defense_epa_per_play": -0.05,
         "offense_success_rate": 48.0, "defense_success_rate": 41.0},
        {"team_abbr": "BUF", "team_name": "Buffalo Bills", "offensive_ppg": "25",
         "defensive_ppg": 20.1, "offensive_ypg": 370, "defensive_ypg": 320,
         "offense_epa_per_play": 0.12, "defense_epa_per_play": 0.01,
         "offense_success_rate": 47.0, "defense_success_rate": 43.0},
        {"team_abbr": "LAR", "team_name": "Los Angeles Rams", "offensive_ppg": 25,
         "defensive_ppg": 22.0, "offensive_ypg": 350, "defensive_ypg": 340,
         "offense_epa_per_play": 0.02, "defense_epa_per_play": 0.03,
         "offense_success_rate": 44.0, "defense_success_rate": 45.0},
        {"team_abbr": "NYJ", "team_name": "New York Jets", "offensive_ppg": 22,
         "defensive_ppg": 24.0, "offensive_ypg": 320, "defensive_ypg": 300,
         "offense_epa_per_play": -0.04, "defense_epa_per_play": -0.02,
         "offense_success_rate": 41.0, "defense_success_rate": 42.0},
        {"team_abbr": "CAR", "team_name": "Carolina Panthers", "offensive_ppg": 18,
         "defensive_ppg": 29.0, "offensive_ypg": 290, "defensive_ypg": 380,
         "offense_epa_per_play": -0.12, "defense_epa_per_play": 0.11,
         "offense_success_rate": None, "defense_success_rate": 49.0},
    ]


@pytest.fixture
def raw_games():
    return [
        {"game_id": "2024_01_BUF_KC", "home_team_abbr": "KC", "away_team_abbr": "BUF",
         "home_score": 27, "away_score": 20},
        {"game_id": "2024_02_KC_LA", "home_team_abbr": "LA", "away_team_abbr": "KC",
         "home_score": "17", "away_score": "24"},
        {"game_id": "2024_03_CAR_NYJ", "home_team_abbr": "NYJ", "away_team_abbr": "CAR",
         "home_score": 10, "away_score": 10},
        {"game_id": "2024_04_NYJ_BUF", "home_team_abbr": "BUF", "away_team_abbr": "NYJ",
         "home_score": 0, "away_score": 3},
        {"game_id": "2024_05_KC_CAR", "home_team_abbr": "CAR", "away_team_abbr": "KC",
         "home_score": None, "away_score": None},
    ]


@pytest.fixture
def raw_players():
    return [
        {"player_id": "qb1", "name": "Alpha Passer", "position": "QB", "team": "KC",
         "passing_yards": 4200, "passing_tds": 32, "completion_percentage": 67.1,
         "interceptions": 2, "epa_per_play": 0.21, "efficiency": 4.1,
         "passer_rating": 104.2, "qbr": 70.1, "cpoe": 3.2, "any_a": 7.4},
        {"player_id": "qb2", "name": "Bravo Passer", "position": "QB", "team": "BUF",
         "passing_yards": 3900, "passing_tds": 28, "completion_percentage": 64.0,
         "interceptions": 5, "epa_per_play": 0.12, "efficiency": 3.0,
         "passer_rating": 97.0, "qbr": 61.0, "cpoe": 1.1, "any_a": 6.8},
        {"player_id": "qb3", "name": "Charlie Passer", "position": "QB", "team": "CAR",
         "passing_yards": 2500, "passing_tds": 12, "completion_percentage": 59.5,
         "interceptions": 14, "epa_per_play": -0.08, "efficiency": 2.2,
         "passer_rating": 78.0, "qbr": 35.0, "cpoe": -3.0, "any_a": 4.9},
        {"player_id": "rb1", "name": "Delta Runner", "position": "RB", "team": "KC",
         "rushing_yards": 1300, "rushing_tds": 12, "yards_per_carry": 5.1, "carries": 255,
         "epa_per_play": 0.05, "efficiency": 3.5},
        {"player_id": "fb1", "name": "Echo Blocker", "position": "FB", "team": "BUF",
         "rushing_yards": 120, "rushing_tds": 2, "yards_per_carry": 4.0, "carries": 30,
         "epa_per_play": -0.01, "efficiency": 3.9},
        {"player_id": "wr1", "name": "Foxtrot Wideout", "position": "WR", "team": "LAR",
         "receiving_yards": 1500, "receptions": 110, "receiving_tds": 11,
         "yards_per_target": 9.8, "epa_per_play": 0.3, "efficiency": 8.0},
        {"player_id": "wr2", "name": "Golf Wideout", "position": "WR", "team": "NYJ",
         "receiving_yards": 900, "receptions": 70, "receiving_tds": 5,
         "yards_per_target": 7.5, "epa_per_play": 0.1, "efficiency": 6.0},
        {"player_id": "te1", "name": "Hotel Tightend", "position": "TE", "team": "KC",
         "receiving_yards": 800, "receptions": 75, "receiving_tds": 6,
         "yards_per_target": 7.9, "epa_per_play": 0.12, "efficiency": 5.0},
        {"player_id": "ls1", "name": "India Snapper", "position": "LS", "team": "KC"},
    ]


# ============================================================================
# API CLIENT
# ============================================================================

@pytest.fixture
def client(monkeypatch, raw_teams, raw_games, raw_players):
    """TestClient with the upstream stats API served from the fixtures above."""
    games_by_id = {g["game_id"]: g for g in raw_games}

    def fake_game_by_id(game_id):
        if game_id not in games_by_id:
            raise upstream.UpstreamError("not found", status_code=404, error_data={"error": "Game not found"})
        return games_by_id[game_id]

    monkeypatch.setattr(upstream, "fetch_teams", lambda season=None: list(raw_teams))
    monkeypatch.setattr(upstream, "fetch_games", lambda season=None, **kw: list(raw_games))
    monkeypatch.setattr(upstream, "fetch_players", lambda season=None, **kw: list(raw_players))
    monkeypatch.setattr(upstream, "fetch_game_by_id", fake_game_by_id)
    return TestClient(create_app())
