"""
Upstream Stats API Client
-------------------------
Thin wrappers around the stats REST API that supplies teams, players and games.

Principles
- No retries/backoff here; one call, one fixed timeout (config.UPSTREAM_TIMEOUT).
- Failures are logged and raised as `UpstreamError`, annotated with the HTTP
  status and error body when the upstream actually answered. Routers turn that
  into a load-error response; the ranking engine never sees a failed fetch.
- Paths are normalized so both "teams/" and "/teams/" work.

Notes
- Season defaults to config.SEASON and is always sent as a query param.
- List endpoints must return a JSON list of objects and single-record endpoints
  a JSON object; anything else is a malformed payload (an UpstreamError).
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

import requests

from statboard import config

logger = logging.getLogger("api.upstream")

_HEADERS = {"Content-Type": "application/json"}


class UpstreamError(Exception):
    """A failed upstream call.

    Attributes:
        is_api_error (bool): True when the upstream responded with an HTTP error
            status (as opposed to a network failure, timeout or bad JSON).
        status_code (int | None): HTTP status of the upstream response, if any.
        error_data (Any): Parsed error body from the upstream, if any.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, error_data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.error_data = error_data
        self.is_api_error = status_code is not None


# ============================
# HTTP
# ============================

def _normalize_path(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


def _error_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


def _get_json(path: str, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None):
    """GET `path` from the upstream base and return parsed JSON.

    Raises:
        UpstreamError: on network failure, timeout, non-2xx status or invalid JSON.
    """
    url = f"{config.UPSTREAM_API_BASE_URL}{_normalize_path(path)}"
    try:
        resp = requests.get(
            url,
            params=params or {},
            headers=_HEADERS,
            timeout=timeout or config.UPSTREAM_TIMEOUT,
        )
    except requests.RequestException as e:
        logger.error("GET %s failed: %s: %s", url, type(e).__name__, e)
        raise UpstreamError(f"{type(e).__name__}: {e}") from e

    if resp.status_code >= 400:
        data = _error_body(resp)
        logger.error("GET %s -> %s %s", url, resp.status_code, data)
        raise UpstreamError(
            f"upstream returned {resp.status_code} for {path}",
            status_code=resp.status_code,
            error_data=data,
        )

    try:
        return resp.json()
    except ValueError as e:
        logger.error("GET %s returned invalid JSON: %s", url, e)
        raise UpstreamError(f"invalid JSON from {path}") from e


def _get_list(path: str, *, params: Optional[Dict[str, Any]] = None) -> List[dict]:
    """A JSON list of records; any other shape is a malformed payload."""
    data = _get_json(path, params=params)
    if not isinstance(data, list):
        logger.error("GET %s returned %s, expected a list", path, type(data).__name__)
        raise UpstreamError(f"malformed payload from {path}: expected a list")
    bad = [type(item).__name__ for item in data if not isinstance(item, Mapping)]
    if bad:
        logger.error("GET %s returned %d non-object rows (%s)", path, len(bad), ", ".join(sorted(set(bad))))
        raise UpstreamError(f"malformed payload from {path}: expected a list of objects")
    return data


def _get_object(path: str, *, params: Optional[Dict[str, Any]] = None) -> dict:
    data = _get_json(path, params=params)
    if not isinstance(data, Mapping):
        logger.error("GET %s returned %s, expected an object", path, type(data).__name__)
        raise UpstreamError(f"malformed payload from {path}: expected an object")
    return data


def _season_params(season: Optional[int], extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    params = {"season": str(season if season is not None else config.SEASON)}
    if extra:
        params.update({k: v for k, v in extra.items() if v is not None})
    return params


# ============================
# Populations
# ============================

def fetch_teams(season: Optional[int] = None) -> List[dict]:
    """Full team population for a season."""
    return _get_list("/teams/", params=_season_params(season))


def fetch_players(season: Optional[int] = None, **filters) -> List[dict]:
    """Full player population for a season; extra filters pass through as query params."""
    return _get_list("/players/", params=_season_params(season, filters))


# ============================
# Games
# ============================

def fetch_games(season: Optional[int] = None, **filters) -> List[dict]:
    return _get_list("/games/", params=_season_params(season, filters))


def fetch_game_by_id(game_id: str) -> dict:
    return _get_object(f"/games/{game_id}")
