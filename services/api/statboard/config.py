"""
Service configuration
---------------------
Settings are read once at import time from the environment so the container
stays stateless and deploy-friendly.

Env
---
- UPSTREAM_API_BASE_URL : stats API base (falls back to VITE_API_BASE_URL, API_BASE_URL)
- UPSTREAM_TIMEOUT      : fixed per-request timeout in seconds (default 10)
- SEASON                : default season for every endpoint (default 2024)
- LOG_LEVEL             : root log level (default INFO)
- PORT                  : local dev port (Cloud Run injects its own)
- MAX_TEAM_SELECTION    : teams allowed on one radar (default 4)
- MAX_PLAYER_SELECTION  : players allowed on one radar (default 3)
"""

import os

# --- Upstream ------------------------------------------------------------------

UPSTREAM_API_BASE_URL = (
    os.getenv("UPSTREAM_API_BASE_URL")
    or os.getenv("VITE_API_BASE_URL")
    or os.getenv("API_BASE_URL")
    or "http://localhost:3099/api"
).rstrip("/")

UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "10"))

# --- Service -------------------------------------------------------------------

SEASON = int(os.getenv("SEASON", "2024"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
PORT = int(os.getenv("PORT", "8080"))

# Comparison selection caps
MAX_TEAM_SELECTION = int(os.getenv("MAX_TEAM_SELECTION", "4"))
MAX_PLAYER_SELECTION = int(os.getenv("MAX_PLAYER_SELECTION", "3"))
