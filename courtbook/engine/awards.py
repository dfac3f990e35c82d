"""League awards: winner capacity, conference grouping and player filtering."""

from __future__ import annotations

from collections.abc import Iterable

from courtbook.engine.conference import (
    Conference,
    ConferenceFallback,
    get_team_by_name,
    resolve_conference,
)
from courtbook.models.award import Award
from courtbook.models.player import Player
from courtbook.models.team import TeamRecord

# Award name → maximum winners per season.
AWARDS_MASTER_LIST: dict[str, int] = {
    "MVP": 1,
    "Rookie of the Year": 1,
    "Most Improved Player": 1,
    "Sixth Man of the Year": 1,
    "Defensive Player of the Year": 1,
    "Finals MVP": 1,
    "Clutch Player of the Year": 1,
    "Coach of the Year": 1,
    "1st Team All-NBA": 5,
    "2nd Team All-NBA": 5,
    "3rd Team All-NBA": 5,
    "1st Team All-Defense": 5,
    "2nd Team All-Defense": 5,
    "1st Team All-Rookie": 5,
    "2nd Team All-Rookie": 5,
    "All-Star": 30,
    "All-Star MVP": 1,
    "3PT Contest Winner": 1,
    "Dunk Contest Winner": 1,
}

ALL_NBA_TEAMS = ("1st Team All-NBA", "2nd Team All-NBA", "3rd Team All-NBA")
ALL_DEFENSE_TEAMS = ("1st Team All-Defense", "2nd Team All-Defense")
ALL_ROOKIE_TEAMS = ("1st Team All-Rookie", "2nd Team All-Rookie")
ALL_STAR_AWARD = "All-Star"

TEAM_BASED_AWARDS: tuple[str, ...] = (
    *ALL_NBA_TEAMS,
    *ALL_DEFENSE_TEAMS,
    *ALL_ROOKIE_TEAMS,
    ALL_STAR_AWARD,
)

CONFERENCES: tuple[Conference, ...] = ("East", "West")


def is_team_based_award(award_name: str) -> bool:
    return award_name in TEAM_BASED_AWARDS


def max_winners(award_name: str) -> int | None:
    """Maximum winners for a known award; None for custom awards."""
    return AWARDS_MASTER_LIST.get(award_name)


def award_conference(award: Award, teams: Iterable[TeamRecord] = ()) -> Conference | None:
    """Conference of the award winner's team, by team id or else team name."""
    team_rows = list(teams)
    if award.winner_team_id:
        return resolve_conference(award.winner_team_id, ConferenceFallback.UNKNOWN, team_rows)
    if award.winner_team_name:
        name = award.winner_team_name.strip().lower()
        for team in team_rows:
            if team.name.lower() == name:
                return resolve_conference(team.id, ConferenceFallback.UNKNOWN, team_rows)
        info = get_team_by_name(award.winner_team_name)
        if info:
            return info.conference
    return None


def group_team_awards(
    awards: Iterable[Award], teams: Iterable[TeamRecord] = ()
) -> dict[str, dict[Conference, list[Award]]]:
    """
    Group team-based awards by award name and winner conference.

    Winners whose conference cannot be resolved are left out. All-Star
    starters are listed before reserves.
    """
    team_rows = list(teams)
    grouped: dict[str, dict[Conference, list[Award]]] = {}
    for award in awards:
        if not is_team_based_award(award.award_name):
            continue
        conference = award_conference(award, team_rows)
        if conference is None:
            continue
        by_conference = grouped.setdefault(
            award.award_name, {conf: [] for conf in CONFERENCES}
        )
        by_conference[conference].append(award)

    if ALL_STAR_AWARD in grouped:
        for conference in CONFERENCES:
            grouped[ALL_STAR_AWARD][conference].sort(key=lambda a: not a.allstar_starter)
    return grouped


def filter_player_awards(player: Player, awards: Iterable[Award]) -> list[Award]:
    """
    Awards won by ``player`` within the player's own league.

    An award belongs to the league when it has no owning player or is owned
    by this player; it was won by the player on an id match or a
    case-insensitive name match.
    """
    name = player.player_name.strip().lower()
    won: list[Award] = []
    for award in awards:
        if award.player_id and award.player_id != player.id:
            continue
        if award.winner_player_id == player.id or (
            award.winner_player_name and award.winner_player_name.strip().lower() == name
        ):
            won.append(award)
    return won
