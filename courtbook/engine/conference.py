"""Team reference data and team → conference resolution.

Unrecognized team ids never crash resolution; they resolve through a
caller-chosen :class:`ConferenceFallback`. The default is ``UNKNOWN``, which
keeps such series in their own bucket rather than silently filing them
under a real conference.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Literal, NamedTuple

import structlog

from courtbook.exceptions import UnknownTeamError
from courtbook.models.team import TeamRecord

logger = structlog.get_logger(__name__)

Conference = Literal["East", "West"]


class ConferenceFallback(str, Enum):
    """What to do with a team id that is not in the reference table."""

    EAST = "east"
    WEST = "west"
    UNKNOWN = "unknown"
    ERROR = "error"


class TeamInfo(NamedTuple):
    id: str
    full_name: str
    abbreviation: str
    conference: Conference
    numeric_id: str


_TEAMS: tuple[TeamInfo, ...] = (
    # Eastern Conference - Atlantic
    TeamInfo("team-bos", "Boston Celtics", "BOS", "East", "1610612738"),
    TeamInfo("team-bkn", "Brooklyn Nets", "BKN", "East", "1610612751"),
    TeamInfo("team-nyk", "New York Knicks", "NYK", "East", "1610612752"),
    TeamInfo("team-phi", "Philadelphia 76ers", "PHI", "East", "1610612755"),
    TeamInfo("team-tor", "Toronto Raptors", "TOR", "East", "1610612761"),
    # Eastern Conference - Central
    TeamInfo("team-chi", "Chicago Bulls", "CHI", "East", "1610612741"),
    TeamInfo("team-cle", "Cleveland Cavaliers", "CLE", "East", "1610612739"),
    TeamInfo("team-det", "Detroit Pistons", "DET", "East", "1610612765"),
    TeamInfo("team-ind", "Indiana Pacers", "IND", "East", "1610612754"),
    TeamInfo("team-mil", "Milwaukee Bucks", "MIL", "East", "1610612749"),
    # Eastern Conference - Southeast
    TeamInfo("team-atl", "Atlanta Hawks", "ATL", "East", "1610612737"),
    TeamInfo("team-cha", "Charlotte Hornets", "CHA", "East", "1610612766"),
    TeamInfo("team-mia", "Miami Heat", "MIA", "East", "1610612748"),
    TeamInfo("team-orl", "Orlando Magic", "ORL", "East", "1610612753"),
    TeamInfo("team-was", "Washington Wizards", "WAS", "East", "1610612764"),
    # Western Conference - Northwest
    TeamInfo("team-den", "Denver Nuggets", "DEN", "West", "1610612743"),
    TeamInfo("team-min", "Minnesota Timberwolves", "MIN", "West", "1610612750"),
    TeamInfo("team-okc", "Oklahoma City Thunder", "OKC", "West", "1610612760"),
    TeamInfo("team-por", "Portland Trail Blazers", "POR", "West", "1610612757"),
    TeamInfo("team-uta", "Utah Jazz", "UTA", "West", "1610612762"),
    # Western Conference - Pacific
    TeamInfo("team-gsw", "Golden State Warriors", "GSW", "West", "1610612744"),
    TeamInfo("team-lac", "LA Clippers", "LAC", "West", "1610612746"),
    TeamInfo("team-lal", "Los Angeles Lakers", "LAL", "West", "1610612747"),
    TeamInfo("team-phx", "Phoenix Suns", "PHX", "West", "1610612756"),
    TeamInfo("team-sac", "Sacramento Kings", "SAC", "West", "1610612758"),
    # Western Conference - Southwest
    TeamInfo("team-dal", "Dallas Mavericks", "DAL", "West", "1610612742"),
    TeamInfo("team-hou", "Houston Rockets", "HOU", "West", "1610612745"),
    TeamInfo("team-mem", "Memphis Grizzlies", "MEM", "West", "1610612763"),
    TeamInfo("team-nop", "New Orleans Pelicans", "NOP", "West", "1610612740"),
    TeamInfo("team-sas", "San Antonio Spurs", "SAS", "West", "1610612759"),
)

NBA_TEAMS: dict[str, TeamInfo] = {team.id: team for team in _TEAMS}

EASTERN_TEAM_IDS: frozenset[str] = frozenset(
    team.id for team in _TEAMS if team.conference == "East"
)

# Alternative spellings seen in entered data.
_NAME_ALIASES: dict[str, str] = {
    "los angeles clippers": "team-lac",
    "la lakers": "team-lal",
}

_TEAMS_BY_NAME: dict[str, TeamInfo] = {team.full_name.lower(): team for team in _TEAMS}


def get_team_by_id(team_id: str | None) -> TeamInfo | None:
    """Look up a team by id, e.g. 'team-atl'."""
    if not team_id:
        return None
    return NBA_TEAMS.get(team_id)


def get_team_by_name(team_name: str | None) -> TeamInfo | None:
    """Look up a team by full name, case-insensitively."""
    if not team_name:
        return None
    key = team_name.strip().lower()
    if key in _NAME_ALIASES:
        return NBA_TEAMS[_NAME_ALIASES[key]]
    return _TEAMS_BY_NAME.get(key)


def team_abbreviation(team_id_or_name: str | None) -> str:
    """
    Abbreviation for a team id or full name.

    Returns 'N/A' for an empty value and the input itself when the team is
    not in the reference table.
    """
    if not team_id_or_name:
        return "N/A"
    team = get_team_by_id(team_id_or_name) or get_team_by_name(team_id_or_name)
    return team.abbreviation if team else team_id_or_name


def _apply_fallback(team_id: str, fallback: ConferenceFallback) -> Conference | None:
    if fallback is ConferenceFallback.ERROR:
        raise UnknownTeamError(f"Cannot resolve conference for team '{team_id}'")
    logger.debug("Unrecognized team id", team_id=team_id, fallback=fallback.value)
    if fallback is ConferenceFallback.EAST:
        return "East"
    if fallback is ConferenceFallback.WEST:
        return "West"
    return None


def resolve_conference(
    team_id: str | None,
    fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
    teams: Iterable[TeamRecord] = (),
) -> Conference | None:
    """
    Map a team id to its conference.

    Args:
        team_id: Team identifier; None or empty resolves to None.
        fallback: Policy for ids not found in ``teams`` or the reference table.
        teams: Optional team rows; an explicit ``conference`` on a row wins.

    Returns:
        "East", "West", or None.

    Raises:
        UnknownTeamError: If the id is unrecognized and ``fallback`` is ERROR.
    """
    if not team_id:
        return None
    fallback = ConferenceFallback(fallback)

    for team in teams:
        if team.id == team_id and team.conference:
            return team.conference  # type: ignore[return-value]

    if team_id in EASTERN_TEAM_IDS:
        return "East"
    if team_id in NBA_TEAMS:
        return "West"
    return _apply_fallback(team_id, fallback)


def resolve_series_conference(
    team1_id: str | None,
    team2_id: str | None,
    fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
    teams: Iterable[TeamRecord] = (),
) -> Conference | None:
    """Conference of a series: the first team that resolves wins."""
    fallback = ConferenceFallback(fallback)
    team_rows = list(teams)
    known = [
        resolve_conference(team_id, ConferenceFallback.UNKNOWN, team_rows)
        for team_id in (team1_id, team2_id)
    ]
    for conference in known:
        if conference is not None:
            return conference

    unresolved = next((team_id for team_id in (team1_id, team2_id) if team_id), None)
    if unresolved is None and fallback is ConferenceFallback.ERROR:
        # A series with no teams entered yet is not an error.
        return None
    return _apply_fallback(unresolved or "", fallback)
