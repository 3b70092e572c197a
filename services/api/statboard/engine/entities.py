"""
Entity pipeline
---------------
Raw upstream records are never modified. Derived fields live on separate frozen
records built by pure transforms:

    raw team dict  + games  --enrich_teams-->  EnrichedTeam (record, alignment, color, logo)
    raw player dict         --tag_players-->   TaggedPlayer (position group)

Both keep the original mapping on `.raw`, which is what stat lookups read.

Game ids look like "2024_01_BAL_KC" (season_week_away_home).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, NamedTuple, Optional

from statboard.engine import league
from statboard.engine.metrics import to_number
from statboard.engine.percentiles import round_half_up
from statboard.engine.positions import PositionGroup, resolve_group


# ============================
# Games
# ============================

class GameKey(NamedTuple):
    season: int
    week: int
    away: Optional[str]
    home: Optional[str]


class Record(NamedTuple):
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_pct(self) -> float:
        return (self.wins + self.ties * 0.5) / max(1, self.games)


def parse_game_id(game_id: Optional[str]) -> Optional[GameKey]:
    if not game_id:
        return None
    parts = str(game_id).split("_")
    if len(parts) < 2:
        return None
    try:
        season, week = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    away = league.canonical_abbr(parts[2]) if len(parts) > 2 else None
    home = league.canonical_abbr(parts[3]) if len(parts) > 3 else None
    return GameKey(season, week, away, home)


def normalize_game(game: Mapping[str, Any]) -> dict:
    """Copy of a game with canonical team codes plus season/week from its id."""
    out = dict(game)
    out["home_team_abbr"] = league.canonical_abbr(game.get("home_team_abbr"))
    out["away_team_abbr"] = league.canonical_abbr(game.get("away_team_abbr"))
    key = parse_game_id(game.get("game_id"))
    if key is not None:
        out.setdefault("season", key.season)
        out.setdefault("week", key.week)
    return out


def _score(value: Any) -> Optional[int]:
    n = to_number(value)
    return None if n is None else int(n)


def _involves(game: Mapping[str, Any], abbr: str) -> bool:
    return abbr in (league.canonical_abbr(game.get("home_team_abbr")),
                    league.canonical_abbr(game.get("away_team_abbr")))


def _perspective(game: Mapping[str, Any], abbr: str):
    """(is_home, team_score, opp_score) for `abbr`; scores None when unplayed."""
    is_home = league.canonical_abbr(game.get("home_team_abbr")) == abbr
    home, away = _score(game.get("home_score")), _score(game.get("away_score"))
    if home is None or away is None:
        return is_home, None, None
    return (is_home, home, away) if is_home else (is_home, away, home)


def team_record(abbr: str, games: Iterable[Mapping[str, Any]]) -> Record:
    """W-L-T from scored games; games without both scores are skipped."""
    abbr = league.canonical_abbr(abbr)
    wins = losses = ties = 0
    for game in games:
        if not _involves(game, abbr):
            continue
        _, mine, theirs = _perspective(game, abbr)
        if mine is None:
            continue
        if mine > theirs:
            wins += 1
        elif mine < theirs:
            losses += 1
        else:
            ties += 1
    return Record(wins, losses, ties)


def _game_order(game: Mapping[str, Any]):
    key = parse_game_id(game.get("game_id"))
    if key is not None:
        return (key.season, key.week)
    week = to_number(game.get("week"))
    return (0, int(week) if week is not None else 0)


def recent_results(abbr: str, games: Iterable[Mapping[str, Any]], limit: int = 5) -> List[dict]:
    """Last `limit` games of a team in schedule order, oldest first."""
    abbr = league.canonical_abbr(abbr)
    mine = sorted((g for g in games if _involves(g, abbr)), key=_game_order)
    out = []
    for game in mine[-limit:] if limit > 0 else []:
        is_home, team_score, opp_score = _perspective(game, abbr)
        opponent = league.canonical_abbr(game.get("away_team_abbr" if is_home else "home_team_abbr"))
        if team_score is None:
            result = "unknown"
        elif team_score > opp_score:
            result = "W"
        elif team_score < opp_score:
            result = "L"
        else:
            result = "T"
        out.append({
            "game_id": game.get("game_id"),
            "opponent": opponent,
            "home": is_home,
            "team_score": team_score,
            "opponent_score": opp_score,
            "result": result,
        })
    return out


# ============================
# Teams
# ============================

@dataclass(frozen=True)
class EnrichedTeam:
    abbr: str
    name: str
    conference: str
    division: str
    record: Record
    color: str
    logo: Optional[str]
    raw: Mapping[str, Any] = field(repr=False)

    @property
    def win_pct(self) -> float:
        return self.record.win_pct

    def to_dict(self) -> dict:
        return {
            **self.raw,
            "team_abbr": self.abbr,
            "team_name": self.name,
            "conference": self.conference,
            "division": self.division,
            "wins": self.record.wins,
            "losses": self.record.losses,
            "ties": self.record.ties,
            "win_pct": round_half_up(self.win_pct, 3),
            "color": self.color,
            "logo": self.logo,
        }


def enrich_team(raw: Mapping[str, Any], games: Iterable[Mapping[str, Any]] = ()) -> EnrichedTeam:
    abbr = league.canonical_abbr(raw.get("team_abbr") or raw.get("abbr") or "")
    conference, division = league.team_alignment(abbr)
    return EnrichedTeam(
        abbr=abbr,
        name=raw.get("team_name") or raw.get("name") or abbr,
        conference=raw.get("conference") or conference,
        division=raw.get("division") or division,
        record=team_record(abbr, games),
        color=league.team_color(abbr),
        logo=raw.get("team_logo_espn") or raw.get("team_logo") or league.fallback_logo(abbr),
        raw=raw,
    )


def enrich_teams(raw_teams: Iterable[Mapping[str, Any]], games: Iterable[Mapping[str, Any]] = ()) -> List[EnrichedTeam]:
    games = list(games)
    return [enrich_team(t, games) for t in raw_teams]


def sort_teams(teams: Iterable[EnrichedTeam], field_name: str, order: str = "desc") -> List[EnrichedTeam]:
    """Sort by a stat or a derived field; numeric when both sides parse, else text."""
    def value(team: EnrichedTeam):
        derived = team.to_dict()
        return derived.get(field_name)

    teams = list(teams)
    nums = [to_number(value(t)) for t in teams]
    if all(n is not None for n in nums):
        keyed = list(zip(nums, teams))
    else:
        keyed = [(str(value(t)).lower(), t) for t in teams]
    keyed.sort(key=lambda kv: kv[0], reverse=(order != "asc"))
    return [t for _, t in keyed]


def team_ident(team: Any) -> dict:
    if isinstance(team, EnrichedTeam):
        return {"team_abbr": team.abbr, "team_name": team.name, "color": team.color}
    abbr = league.canonical_abbr(team.get("team_abbr"))
    return {"team_abbr": abbr, "team_name": team.get("team_name"), "color": league.team_color(abbr)}


# ============================
# Players
# ============================

@dataclass(frozen=True)
class TaggedPlayer:
    player_id: str
    name: str
    position: Optional[str]
    team: Optional[str]
    headshot: Optional[str]
    group: Optional[PositionGroup]
    raw: Mapping[str, Any] = field(repr=False)

    def to_dict(self) -> dict:
        return {
            **self.raw,
            "player_id": self.player_id,
            "name": self.name,
            "position": self.position,
            "team": self.team,
            "headshot": self.headshot,
            "group": self.group.value if self.group else None,
        }


def tag_player(raw: Mapping[str, Any]) -> TaggedPlayer:
    position = raw.get("position")
    return TaggedPlayer(
        player_id=str(raw.get("player_id") or raw.get("id") or ""),
        name=raw.get("name") or raw.get("player_name") or "",
        position=position,
        team=league.canonical_abbr(raw.get("team_abbr") or raw.get("team")),
        headshot=raw.get("headshot_url") or raw.get("headshot"),
        group=resolve_group(position),
        raw=raw,
    )


def tag_players(raw_players: Iterable[Mapping[str, Any]]) -> List[TaggedPlayer]:
    return [tag_player(p) for p in raw_players]


def player_ident(player: Any) -> dict:
    if isinstance(player, TaggedPlayer):
        return {"player_id": player.player_id, "name": player.name,
                "position": player.position, "team": player.team}
    return {"player_id": str(player.get("player_id") or player.get("id") or ""),
            "name": player.get("name"), "position": player.get("position"),
            "team": player.get("team")}
