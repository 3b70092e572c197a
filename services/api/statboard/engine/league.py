"""
League reference tables: team colors, conference/division alignment, logo
fallbacks and abbreviation aliases seen in upstream game feeds.
"""

from typing import Optional

TEAM_COLORS = {
    "ARI": "#97233F", "ATL": "#A71930", "BAL": "#241773", "BUF": "#00338D",
    "CAR": "#0085CA", "CHI": "#0B162A", "CIN": "#FB4F14", "CLE": "#311D00",
    "DAL": "#003594", "DEN": "#FB4F14", "DET": "#0076B6", "GB": "#203731",
    "HOU": "#03202F", "IND": "#002C5F", "JAX": "#101820", "KC": "#E31837",
    "LAC": "#0080C6", "LAR": "#003594", "LV": "#000000", "MIA": "#008E97",
    "MIN": "#4F2683", "NE": "#002244", "NO": "#D3BC8D", "NYG": "#0B2265",
    "NYJ": "#125740", "PHI": "#004C54", "PIT": "#FFB612", "SEA": "#002244",
    "SF": "#AA0000", "TB": "#D50A0A", "TEN": "#0C2340", "WAS": "#773141",
}
DEFAULT_TEAM_COLOR = "#666666"

# abbr -> (conference, division)
TEAM_ALIGNMENT = {
    "ARI": ("NFC", "West"), "ATL": ("NFC", "South"), "BAL": ("AFC", "North"),
    "BUF": ("AFC", "East"), "CAR": ("NFC", "South"), "CHI": ("NFC", "North"),
    "CIN": ("AFC", "North"), "CLE": ("AFC", "North"), "DAL": ("NFC", "East"),
    "DEN": ("AFC", "West"), "DET": ("NFC", "North"), "GB": ("NFC", "North"),
    "HOU": ("AFC", "South"), "IND": ("AFC", "South"), "JAX": ("AFC", "South"),
    "KC": ("AFC", "West"), "LAC": ("AFC", "West"), "LAR": ("NFC", "West"),
    "LV": ("AFC", "West"), "MIA": ("AFC", "East"), "MIN": ("NFC", "North"),
    "NE": ("AFC", "East"), "NO": ("NFC", "South"), "NYG": ("NFC", "East"),
    "NYJ": ("AFC", "East"), "PHI": ("NFC", "East"), "PIT": ("AFC", "North"),
    "SEA": ("NFC", "West"), "SF": ("NFC", "West"), "TB": ("NFC", "South"),
    "TEN": ("AFC", "South"), "WAS": ("NFC", "East"),
}
UNKNOWN_ALIGNMENT = ("Unknown", "Unknown")

# Game feeds still carry the old Rams / Washington codes
ABBR_ALIASES = {"LA": "LAR", "WSH": "WAS"}

# ESPN's CDN uses "wsh" for Washington
_LOGO_SLUGS = {"WAS": "wsh"}
_LOGO_URL = "https://a.espncdn.com/i/teamlogos/nfl/500/{slug}.png"


def canonical_abbr(abbr: Optional[str]) -> Optional[str]:
    if not abbr:
        return abbr
    abbr = str(abbr).strip().upper()
    return ABBR_ALIASES.get(abbr, abbr)


def team_color(abbr: Optional[str]) -> str:
    return TEAM_COLORS.get(canonical_abbr(abbr) or "", DEFAULT_TEAM_COLOR)


def team_alignment(abbr: Optional[str]) -> tuple:
    return TEAM_ALIGNMENT.get(canonical_abbr(abbr) or "", UNKNOWN_ALIGNMENT)


def fallback_logo(abbr: Optional[str]) -> Optional[str]:
    abbr = canonical_abbr(abbr)
    if abbr not in TEAM_ALIGNMENT:
        return None
    return _LOGO_URL.format(slug=_LOGO_SLUGS.get(abbr, abbr.lower()))
