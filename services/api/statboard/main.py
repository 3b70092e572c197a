"""
Statboard API
-------------
Application factory for the ranking service. Mounts the teams, players, games
and leaders routers, exposes /health for liveness checks and sends "/" to the docs.

Notes
-----
- Nothing is built at import time; uvicorn runs `create_app` in factory mode.
- Every ranking request pulls its population from the upstream stats API
  (config.UPSTREAM_API_BASE_URL); the service itself holds no state.
"""

import importlib
import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from statboard import config

logger = logging.getLogger("api")
logging.basicConfig(level=config.LOG_LEVEL)

ROUTERS = ["teams", "players", "games", "leaders"]


def create_app() -> FastAPI:
    """Build the FastAPI app.

    Routes:
        GET /health -> {"status": "ok", "season": <default season>}
        GET /       -> redirect to /docs
        /teams, /players, /games, /leaders from statboard.routers.*
    """
    app = FastAPI(title="NFL Statboard API", version="0.1.0")

    @app.get("/health")
    def health():
        return {"status": "ok", "season": config.SEASON}

    @app.get("/")
    def index():
        return RedirectResponse(url="/docs")

    # import errors surface at startup, not on first request
    for name in ROUTERS:
        module = importlib.import_module(f"statboard.routers.{name}")
        app.include_router(module.router)
        logger.info("Mounted router %s (%s)", name, module.router.prefix)

    logger.debug("Routes: %s", [getattr(r, "path", "?") for r in app.router.routes])
    logger.info("Statboard ready; upstream=%s season=%s", config.UPSTREAM_API_BASE_URL, config.SEASON)
    return app


# Local dev: `uvicorn statboard.main:create_app --factory --reload --app-dir services/api`
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("statboard.main:create_app", host="0.0.0.0", port=config.PORT, factory=True, reload=True)
