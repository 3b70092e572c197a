"""
Router helpers shared by the teams / players / games endpoints.

- `upstream_call` turns an `UpstreamError` into the HTTP answer the client sees:
  404 passes through, everything else is a 502 load error carrying the
  upstream status and body.
- `parse_csv` splits "KC,BUF" style selection params.
"""

from typing import Callable, List, Optional, TypeVar

from fastapi import HTTPException

from statboard.upstream import UpstreamError

T = TypeVar("T")


def upstream_call(fn: Callable[..., T], *args, **kwargs) -> T:
    try:
        return fn(*args, **kwargs)
    except UpstreamError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail=e.error_data or str(e)) from e
        raise HTTPException(
            status_code=502,
            detail={
                "message": f"Failed to load data from the stats API: {e}",
                "upstream_status": e.status_code,
                "upstream_error": e.error_data,
            },
        ) from e


def parse_csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    seen, out = set(), []
    for tok in value.split(","):
        tok = tok.strip()
        if tok and tok not in seen:
            seen.add(tok)
            out.append(tok)
    return out


def check_selection(ids: List[str], limit: int, what: str) -> None:
    if not ids:
        raise HTTPException(status_code=400, detail=f"select at least one {what}")
    if len(ids) > limit:
        raise HTTPException(status_code=400, detail=f"select at most {limit} {what}s")
