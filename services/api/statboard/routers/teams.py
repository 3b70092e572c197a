"""
Teams Router
------------
Team list, stat cards, scatter matrix, radar and head-to-head payloads.

Base path: /teams
Tags: ["teams"]

Notes
-----
- Every request loads the full season population from the stats API. Filters
  (search / conference / division) only narrow the teams returned; percentiles
  and grades are always ranked against all teams.
- Records come from the season's games. If the games feed fails the teams still
  load with 0-0-0 records (logged as a warning); a failed teams feed is a 502.
- Routes with fixed segments are declared before "/{team_abbr}".
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from statboard import config, upstream
from statboard.deps import check_selection, parse_csv, upstream_call
from statboard.engine.entities import (
    EnrichedTeam,
    enrich_teams,
    recent_results,
    sort_teams,
    team_ident,
)
from statboard.engine.grades import composite_grade, stat_cards
from statboard.engine.head_to_head import head_to_head
from statboard.engine.league import canonical_abbr
from statboard.engine.metrics import (
    TEAM_CARD_METRICS,
    TEAM_MATRIX_METRICS,
    TEAM_PLAY_STYLE_METRICS,
    TEAM_RADAR_METRICS,
    TEAM_SITUATIONAL_METRICS,
    describe,
    find_metric,
)
from statboard.engine.percentiles import round_half_up
from statboard.engine.quadrants import team_matrix
from statboard.engine.radar import normalize_for_radar
from statboard.engine.rankings import league_ranks
from statboard.upstream import UpstreamError

logger = logging.getLogger("api.teams")

router = APIRouter(prefix="/teams", tags=["teams"])


# --- Loading & filtering -------------------------------------------------------

def _load_games(season: int) -> List[dict]:
    try:
        return upstream.fetch_games(season)
    except UpstreamError as e:
        logger.warning("Games unavailable for %s, records default to 0-0-0: %s", season, e)
        return []


def _load_teams(season: Optional[int]) -> tuple[int, List[EnrichedTeam], List[dict]]:
    season = season or config.SEASON
    raw = upstream_call(upstream.fetch_teams, season)
    games = _load_games(season)
    return season, enrich_teams(raw, games), games


def _visible(teams: List[EnrichedTeam], search: Optional[str], conference: Optional[str],
             division: Optional[str]) -> List[EnrichedTeam]:
    out = teams
    if search:
        s = search.strip().lower()
        out = [t for t in out if s in t.abbr.lower() or s in (t.name or "").lower()]
    if conference and conference.lower() != "all":
        out = [t for t in out if t.conference.lower() == conference.lower()]
    if division and division.lower() != "all":
        out = [t for t in out if t.division.lower() == division.lower()]
    return out


def _find(teams: List[EnrichedTeam], abbr: str) -> EnrichedTeam:
    wanted = canonical_abbr(abbr)
    for t in teams:
        if t.abbr == wanted:
            return t
    raise HTTPException(status_code=404, detail=f"Team not found: {abbr}")


def _card_payload(team: EnrichedTeam, population: List[EnrichedTeam], games: List[dict]) -> dict:
    return {
        **team_ident(team),
        "conference": team.conference,
        "division": team.division,
        "record": team.record._asdict(),
        "win_pct": round_half_up(team.win_pct, 3),
        "logo": team.logo,
        "grade": composite_grade(team, TEAM_CARD_METRICS, population).to_dict(),
        "stats": [c.to_dict() for c in stat_cards(team, TEAM_CARD_METRICS, population)],
        "recent": recent_results(team.abbr, games),
    }


# --- Endpoints -----------------------------------------------------------------

@router.get("/")
def list_teams(
    season: Optional[int] = None,
    search: Optional[str] = None,
    conference: Optional[str] = None,
    division: Optional[str] = None,
    sort_by: str = "win_pct",
    order: str = "desc",
):
    """Enriched teams (record, alignment, color, logo) for the season."""
    season, teams, _ = _load_teams(season)
    visible = sort_teams(_visible(teams, search, conference, division), sort_by, order)
    return {
        "season": season,
        "conferences": sorted({t.conference for t in teams}),
        "divisions": sorted({t.division for t in teams}),
        "items": [t.to_dict() for t in visible],
    }


@router.get("/cards")
def team_cards(
    season: Optional[int] = None,
    search: Optional[str] = None,
    conference: Optional[str] = None,
    division: Optional[str] = None,
):
    """Per-team percentile cards, composite grade and last five results."""
    season, teams, games = _load_teams(season)
    visible = _visible(teams, search, conference, division)
    return {
        "season": season,
        "metrics": describe(TEAM_CARD_METRICS),
        "items": [_card_payload(t, teams, games) for t in visible],
    }


@router.get("/matrix")
def team_scatter_matrix(
    x: str = "offensive_ppg",
    y: str = "defensive_ppg",
    season: Optional[int] = None,
    conference: Optional[str] = None,
    division: Optional[str] = None,
):
    """Quadrant scatter of the visible teams on two metrics.

    Averages are taken over the plotted teams; point percentiles rank against
    the whole league.
    """
    x_metric = find_metric(x, TEAM_MATRIX_METRICS)
    y_metric = find_metric(y, TEAM_MATRIX_METRICS)
    if x_metric is None or y_metric is None:
        choices = [m.key.value for m in TEAM_MATRIX_METRICS]
        raise HTTPException(status_code=400, detail=f"x and y must be one of {choices}")

    season, teams, _ = _load_teams(season)
    visible = _visible(teams, None, conference, division)
    points, averages = team_matrix(visible, x_metric, y_metric, teams)
    return {
        "points": [p.to_dict(team_ident) for p in points],
        "meta": {
            "season": season,
            "x_metric": x_metric.key.value,
            "y_metric": y_metric.key.value,
            "x_label": x_metric.label,
            "y_label": y_metric.label,
            "y_inverted": y_metric.inverted,
            "average_x": averages["x"],
            "average_y": averages["y"],
            "options": describe(TEAM_MATRIX_METRICS),
        },
    }


@router.get("/radar")
def team_radar(
    teams: str = Query(..., description="Comma separated abbreviations, e.g. KC,BUF"),
    season: Optional[int] = None,
):
    """Radar rows for up to MAX_TEAM_SELECTION teams, normalized over the league."""
    wanted = parse_csv(teams)
    check_selection(wanted, config.MAX_TEAM_SELECTION, "team")
    season, population, _ = _load_teams(season)
    selected = [_find(population, a) for a in wanted]
    rows = normalize_for_radar(TEAM_RADAR_METRICS, selected, population)
    return {
        "season": season,
        "teams": [team_ident(t) for t in selected],
        "rows": [r.to_dict(team_ident) for r in rows],
    }


@router.get("/compare/{team_a}/{team_b}")
def compare_teams(team_a: str, team_b: str, season: Optional[int] = None):
    """Head-to-head on the card metrics; percentages are per-metric relative."""
    season, population, _ = _load_teams(season)
    a, b = _find(population, team_a), _find(population, team_b)
    return {
        "season": season,
        "team_a": team_ident(a),
        "team_b": team_ident(b),
        "rows": [r.to_dict() for r in head_to_head(TEAM_CARD_METRICS, a, b)],
    }


@router.get("/{team_abbr}")
def get_team(team_abbr: str, season: Optional[int] = None):
    """Single team with card, play-style and situational percentiles plus
    "N of M" league ranks on the card metrics."""
    season, population, games = _load_teams(season)
    team = _find(population, team_abbr)
    payload = _card_payload(team, population, games)
    payload["play_style"] = [c.to_dict() for c in stat_cards(team, TEAM_PLAY_STYLE_METRICS, population)]
    payload["situational"] = [c.to_dict() for c in stat_cards(team, TEAM_SITUATIONAL_METRICS, population)]
    payload["rankings"] = [r.to_dict() for r in league_ranks(team, TEAM_CARD_METRICS, population)]
    payload["season"] = season
    return payload
