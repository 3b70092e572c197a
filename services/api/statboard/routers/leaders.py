"""
Leaders Router
--------------
Top-N leaderboards over the full season population.

Base path: /leaders
Tags: ["leaders"]

Notes
-----
- GET /leaders/ is the landing board: teams on points and EPA per play
  (offense and defense), QB / RB / WR on their key yardage stat.
- /leaders/teams and /leaders/players rank any single stat. Lower-is-better
  stats list the lowest value first; entities without the stat are left out.
- qualified=true applies the small-sample cut (engine.rankings.qualifies),
  including the pass-attempt floor on QB rate stats.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from statboard import config, upstream
from statboard.deps import upstream_call
from statboard.engine.entities import enrich_teams, player_ident, tag_players, team_ident
from statboard.engine.metrics import ALL_TEAM_METRICS, TEAM_LEADER_METRICS, find_metric
from statboard.engine.positions import POSITION_CONFIG, PositionGroup, resolve_group, stats_for
from statboard.engine.rankings import leaders, qualifies

router = APIRouter(prefix="/leaders", tags=["leaders"])

BOARD_GROUPS = (PositionGroup.QB, PositionGroup.RB, PositionGroup.WR)


def _board(entities, metric, n, ident) -> dict:
    return {
        "key": metric.key.value,
        "label": metric.label,
        "inverted": metric.inverted,
        "items": [row.to_dict(ident, metric.precision) for row in leaders(entities, metric, n)],
    }


def _load_teams(season: int):
    return enrich_teams(upstream_call(upstream.fetch_teams, season))


def _load_players(season: int):
    return tag_players(upstream_call(upstream.fetch_players, season))


@router.get("/")
def landing_leaders(season: Optional[int] = None, n: int = Query(5, ge=1, le=32)):
    """Team and QB/RB/WR leaderboards for the landing view."""
    season = season or config.SEASON
    teams = _load_teams(season)
    players = _load_players(season)

    player_boards = {}
    for group in BOARD_GROUPS:
        members = [p for p in players if p.group == group]
        player_boards[group.value] = _board(members, POSITION_CONFIG[group].key_stat, n, player_ident)

    return {
        "season": season,
        "teams": {m.key.value: _board(teams, m, n, team_ident) for m in TEAM_LEADER_METRICS},
        "players": player_boards,
    }


@router.get("/teams")
def team_leaders(stat: str, season: Optional[int] = None, n: int = Query(5, ge=1, le=32)):
    metric = find_metric(stat, ALL_TEAM_METRICS)
    if metric is None:
        raise HTTPException(status_code=400, detail=f"unknown team stat: {stat}")
    season = season or config.SEASON
    return {"season": season, **_board(_load_teams(season), metric, n, team_ident)}


@router.get("/players")
def player_leaders(
    position: str,
    stat: Optional[str] = None,
    season: Optional[int] = None,
    n: int = Query(5, ge=1, le=100),
    qualified: bool = False,
):
    """Top players of one position group on one of its stats (default: key stat)."""
    group = resolve_group(position)
    if group is None:
        raise HTTPException(status_code=400, detail=f"position must map to one of {[g.value for g in PositionGroup]}")
    choices = stats_for(group, "primary") + stats_for(group, "secondary")
    metric = find_metric(stat, choices) if stat else POSITION_CONFIG[group].key_stat
    if metric is None:
        raise HTTPException(status_code=400, detail=f"unknown {group.value} stat: {stat}")

    season = season or config.SEASON
    members = [p for p in _load_players(season) if p.group == group]
    if qualified:
        members = [p for p in members if qualifies(p, metric)]
    return {"season": season, "group": group.value, **_board(members, metric, n, player_ident)}
