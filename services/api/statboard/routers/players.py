"""
Players Router
--------------
Player list, stat cards with grades, per-position scatter matrix, radar and
head-to-head payloads.

Base path: /players
Tags: ["players"]

Notes
-----
- The full season population is loaded per request and tagged with a position
  group (QB / RB / WR / TE). Players whose position does not map are listed but
  never graded, carded or plotted.
- Percentiles rank a player against the same group in the FULL population; the
  search / position / team filters only narrow what is returned.
- qualified=true also drops small samples (engine.rankings.qualifies); it
  narrows the visible players the same way and never changes percentiles.
- stat_set: "primary" (default) or "secondary" (advanced).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from statboard import config, upstream
from statboard.deps import check_selection, parse_csv, upstream_call
from statboard.engine.entities import TaggedPlayer, player_ident, tag_players
from statboard.engine.grades import player_composite_grade, stat_cards
from statboard.engine.head_to_head import head_to_head
from statboard.engine.league import canonical_abbr
from statboard.engine.metrics import describe
from statboard.engine.positions import (
    POSITION_CONFIG,
    STAT_SETS,
    resolve_group,
    sort_players_by_position,
    stats_for,
)
from statboard.engine.quadrants import player_matrix
from statboard.engine.radar import player_radar, player_radar_metrics
from statboard.engine.rankings import qualifies

logger = logging.getLogger("api.players")

router = APIRouter(prefix="/players", tags=["players"])


# --- Loading & filtering -------------------------------------------------------

def _load_players(season: Optional[int]) -> tuple[int, List[TaggedPlayer]]:
    season = season or config.SEASON
    raw = upstream_call(upstream.fetch_players, season)
    players = tag_players(raw)
    ungrouped = sum(1 for p in players if p.group is None)
    if ungrouped:
        logger.debug("%d of %d players have no position group", ungrouped, len(players))
    return season, players


def _normalize_stat_set(stat_set: str) -> str:
    ss = (stat_set or "primary").strip().lower()
    if ss not in STAT_SETS:
        raise HTTPException(status_code=400, detail=f"stat_set must be one of {list(STAT_SETS)}")
    return ss


def _visible(players: List[TaggedPlayer], search: Optional[str], position: Optional[str],
             team: Optional[str], qualified: bool = False) -> List[TaggedPlayer]:
    out = players
    if search:
        s = search.strip().lower()
        out = [p for p in out if s in p.name.lower() or s in (p.team or "").lower()]
    if position and position.upper() != "ALL":
        group = resolve_group(position)
        out = [p for p in out if p.group == group] if group else [
            p for p in out if (p.position or "").upper() == position.upper()
        ]
    if team:
        abbr = canonical_abbr(team)
        out = [p for p in out if p.team == abbr]
    if qualified:
        out = [p for p in out if qualifies(p)]
    return out


def _find(players: List[TaggedPlayer], player_id: str) -> TaggedPlayer:
    for p in players:
        if p.player_id == str(player_id):
            return p
    raise HTTPException(status_code=404, detail=f"Player not found: {player_id}")


def _peers(player: TaggedPlayer, population: List[TaggedPlayer]) -> List[TaggedPlayer]:
    return [p for p in population if p.group == player.group]


def _card_payload(player: TaggedPlayer, population: List[TaggedPlayer], stat_set: str) -> dict:
    peers = _peers(player, population)
    grade = player_composite_grade(player, population)
    return {
        **player_ident(player),
        "group": player.group.value,
        "color": POSITION_CONFIG[player.group].color,
        "headshot": player.headshot,
        "grade": grade.to_dict() if grade else None,
        "stats": [c.to_dict() for c in stat_cards(player, stats_for(player.group, stat_set), peers)],
    }


# --- Endpoints -----------------------------------------------------------------

@router.get("/")
def list_players(
    season: Optional[int] = None,
    search: Optional[str] = None,
    position: Optional[str] = None,
    team: Optional[str] = None,
):
    """Players in the initial order: QB, RB, WR, TE, others; key stat desc; name."""
    season, players = _load_players(season)
    visible = sort_players_by_position(_visible(players, search, position, team))
    return {"season": season, "items": [p.to_dict() for p in visible]}


@router.get("/cards")
def player_cards(
    season: Optional[int] = None,
    stat_set: str = "primary",
    search: Optional[str] = None,
    position: Optional[str] = None,
    team: Optional[str] = None,
    qualified: bool = False,
):
    """Stat cards and composite grade for every visible player with a group."""
    ss = _normalize_stat_set(stat_set)
    season, players = _load_players(season)
    visible = [p for p in sort_players_by_position(_visible(players, search, position, team, qualified))
               if p.group is not None]
    return {
        "season": season,
        "stat_set": ss,
        "items": [_card_payload(p, players, ss) for p in visible],
    }


@router.get("/matrix")
def player_scatter_matrix(
    season: Optional[int] = None,
    search: Optional[str] = None,
    position: Optional[str] = None,
    team: Optional[str] = None,
    qualified: bool = False,
):
    """Per-group quadrant scatter on each group's first two primary stats."""
    season, players = _load_players(season)
    visible = _visible(players, search, position, team, qualified)
    points, groups = player_matrix(visible, players)
    return {
        "points": [p.to_dict(player_ident) for p in points],
        "meta": {"season": season, "groups": groups},
    }


@router.get("/radar")
def player_radar_rows(
    players: str = Query(..., description="Comma separated player ids"),
    season: Optional[int] = None,
    stat_set: str = "primary",
):
    """Radar rows for up to MAX_PLAYER_SELECTION players.

    Mixed position groups fall back to the generic metric list.
    """
    ss = _normalize_stat_set(stat_set)
    wanted = parse_csv(players)
    check_selection(wanted, config.MAX_PLAYER_SELECTION, "player")
    season, population = _load_players(season)
    selected = [_find(population, pid) for pid in wanted]
    metrics, group = player_radar_metrics(selected, ss)
    rows = player_radar(selected, population, ss)
    return {
        "season": season,
        "group": group.value if group else None,
        "metrics": describe(metrics),
        "players": [player_ident(p) for p in selected],
        "rows": [r.to_dict(player_ident) for r in rows],
    }


@router.get("/compare/{player_a}/{player_b}")
def compare_players(player_a: str, player_b: str, season: Optional[int] = None, stat_set: str = "primary"):
    """Head-to-head on the shared stat list of two players."""
    ss = _normalize_stat_set(stat_set)
    season, population = _load_players(season)
    a, b = _find(population, player_a), _find(population, player_b)
    metrics, group = player_radar_metrics([a, b], ss)
    return {
        "season": season,
        "group": group.value if group else None,
        "player_a": player_ident(a),
        "player_b": player_ident(b),
        "rows": [r.to_dict() for r in head_to_head(metrics, a, b)],
    }


@router.get("/{player_id}")
def get_player(player_id: str, season: Optional[int] = None):
    """Single player with primary and secondary cards (none when ungrouped)."""
    season, population = _load_players(season)
    player = _find(population, player_id)
    if player.group is None:
        return {**player.to_dict(), "season": season, "grade": None, "primary": [], "secondary": []}

    peers = _peers(player, population)
    grade = player_composite_grade(player, population)
    return {
        **player.to_dict(),
        "season": season,
        "grade": grade.to_dict() if grade else None,
        "primary": [c.to_dict() for c in stat_cards(player, stats_for(player.group, "primary"), peers)],
        "secondary": [c.to_dict() for c in stat_cards(player, stats_for(player.group, "secondary"), peers)],
    }
