"""
Games Router
------------
Season game listings and single-game lookups, passed through from the stats API
with team codes normalized (LA -> LAR, WSH -> WAS) and season/week read from the
game id ("SEASON_WEEK_AWAY_HOME").

Base path: /games
Tags: ["games"]
"""

from typing import Optional

from fastapi import APIRouter

from statboard import config, upstream
from statboard.deps import upstream_call
from statboard.engine.entities import normalize_game, parse_game_id
from statboard.engine.league import canonical_abbr
from statboard.engine.metrics import to_number

router = APIRouter(prefix="/games", tags=["games"])


@router.get("/")
def list_games(season: Optional[int] = None, week: Optional[int] = None, team: Optional[str] = None):
    """Games for a season, optionally one week and/or one team."""
    season = season or config.SEASON
    raw = upstream_call(upstream.fetch_games, season, week=week)
    games = [normalize_game(g) for g in raw]
    if week is not None:
        games = [g for g in games if to_number(g.get("week")) in (None, float(week))]
    if team:
        abbr = canonical_abbr(team)
        games = [g for g in games if abbr in (g.get("home_team_abbr"), g.get("away_team_abbr"))]
    return {"season": season, "items": games}


@router.get("/{game_id}")
def get_game(game_id: str):
    """A single game; 404 when the stats API has no such id."""
    game = normalize_game(upstream_call(upstream.fetch_game_by_id, game_id))
    key = parse_game_id(game.get("game_id") or game_id)
    game["matchup"] = key._asdict() if key else None
    return game
