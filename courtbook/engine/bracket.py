"""Organize a season's playoff series into a conference/round bracket."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from courtbook.engine.conference import (
    Conference,
    ConferenceFallback,
    get_team_by_id,
    resolve_series_conference,
    team_abbreviation,
)
from courtbook.engine.series import FINALS_ROUND, apply_outcome
from courtbook.models.game import GameStatRecord
from courtbook.models.playoff import PlayoffSeries
from courtbook.models.team import TeamRecord

logger = structlog.get_logger(__name__)

TBD = "TBD"
PLAY_IN_MARKERS = ("play-in", "play in")


@dataclass
class BracketSeries:
    """A series ready for display, with live outcome and the player's games."""

    series: PlayoffSeries
    team1_display: str
    team2_display: str
    team1_abbrev: str
    team2_abbrev: str
    conference: Conference | None
    games: list[GameStatRecord] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.series.id


@dataclass
class BracketTree:
    """Every series in exactly one bucket."""

    finals: list[BracketSeries] = field(default_factory=list)
    east: dict[int, list[BracketSeries]] = field(default_factory=dict)
    west: dict[int, list[BracketSeries]] = field(default_factory=dict)
    east_play_in: list[BracketSeries] = field(default_factory=list)
    west_play_in: list[BracketSeries] = field(default_factory=list)
    unresolved: list[BracketSeries] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.all_series()

    def all_series(self) -> list[BracketSeries]:
        """Every series in the tree, bucket by bucket."""
        result = list(self.finals)
        for rounds in (self.west, self.east):
            for number in sorted(rounds):
                result.extend(rounds[number])
        result.extend(self.west_play_in)
        result.extend(self.east_play_in)
        result.extend(self.unresolved)
        return result


def is_play_in(series: PlayoffSeries) -> bool:
    """Round 0, or a round name mentioning the play-in."""
    name = series.round_name.lower()
    return series.round_number == 0 or any(marker in name for marker in PLAY_IN_MARKERS)


def is_finals(series: PlayoffSeries) -> bool:
    return series.round_name == FINALS_ROUND


def _team_display(
    team_id: str | None, fallback_name: str | None, teams: dict[str, TeamRecord]
) -> tuple[str, str]:
    team = teams.get(team_id) if team_id else None
    display = (team.name if team else None) or fallback_name or TBD
    abbrev = team.abbreviation if team and team.abbreviation else team_abbreviation(display)
    return display, abbrev


def _names_match(a: str | None, b: str | None) -> bool:
    if not a or not b or a == TBD or b == TBD:
        return False
    return a.strip().lower() == b.strip().lower()


def _opponent_name(game: GameStatRecord, teams: dict[str, TeamRecord]) -> str | None:
    if game.opponent_team_name:
        return game.opponent_team_name
    if game.opponent_team_id in teams:
        return teams[game.opponent_team_id].name
    info = get_team_by_id(game.opponent_team_id)
    return info.full_name if info else None


def games_for_series(
    series: PlayoffSeries,
    team1_display: str,
    team2_display: str,
    player_games: Iterable[GameStatRecord],
    player_team_name: str | None,
    teams: dict[str, TeamRecord],
    match_by_team_name: bool = True,
) -> list[GameStatRecord]:
    """
    Select the player's playoff games that belong to ``series``.

    A game belongs when its series reference equals the series id. With
    ``match_by_team_name``, a game with no series reference also belongs when
    its opponent is one series team and the player's team is the other; this
    covers games recorded before series references existed.
    """
    matched: list[GameStatRecord] = []
    for game in player_games:
        if not game.is_playoff_game:
            continue
        if game.playoff_series_id:
            if game.playoff_series_id == series.id:
                matched.append(game)
            continue
        if not match_by_team_name:
            continue
        opponent = _opponent_name(game, teams)
        if (
            _names_match(opponent, team1_display) and _names_match(player_team_name, team2_display)
        ) or (
            _names_match(opponent, team2_display) and _names_match(player_team_name, team1_display)
        ):
            matched.append(game)
    return matched


def prepare_series(
    series: PlayoffSeries,
    teams: dict[str, TeamRecord],
    player_games: Sequence[GameStatRecord],
    player_team_name: str | None,
    conference_fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
    match_by_team_name: bool = True,
) -> BracketSeries:
    """Resolve names, conference, live outcome and games for one series."""
    team1_display, team1_abbrev = _team_display(series.team1_id, series.team1_name, teams)
    team2_display, team2_abbrev = _team_display(series.team2_id, series.team2_name, teams)
    conference = (
        None
        if is_finals(series)
        else resolve_series_conference(
            series.team1_id, series.team2_id, conference_fallback, teams.values()
        )
    )
    return BracketSeries(
        series=apply_outcome(series),
        team1_display=team1_display,
        team2_display=team2_display,
        team1_abbrev=team1_abbrev,
        team2_abbrev=team2_abbrev,
        conference=conference,
        games=games_for_series(
            series,
            team1_display,
            team2_display,
            player_games,
            player_team_name,
            teams,
            match_by_team_name,
        ),
    )


def organize_bracket(
    series: Iterable[PlayoffSeries],
    teams: Iterable[TeamRecord],
    player_games: Iterable[GameStatRecord],
    player_team_name: str | None = None,
    conference_fallback: ConferenceFallback | str = ConferenceFallback.UNKNOWN,
    match_by_team_name: bool = True,
) -> BracketTree:
    """
    Group a season's series into finals, per-conference rounds and play-ins.

    Args:
        series: The season's series, in display order.
        teams: Team reference rows used for names, abbreviations and conference.
        player_games: The player's games for the season.
        player_team_name: The player's team, for name-based game matching.
        conference_fallback: Policy for series whose teams are unrecognized.
        match_by_team_name: Enable name-based matching of legacy games.

    Returns:
        A fresh BracketTree. Series whose conference stays unresolved under
        the UNKNOWN policy land in ``unresolved``.
    """
    team_table = {team.id: team for team in teams}
    games = list(player_games)
    tree = BracketTree()

    for item in series:
        entry = prepare_series(
            item, team_table, games, player_team_name, conference_fallback, match_by_team_name
        )
        if is_finals(item):
            tree.finals.append(entry)
        elif entry.conference is None:
            logger.warning(
                "Series conference unresolved",
                series_id=item.id,
                team1_id=item.team1_id,
                team2_id=item.team2_id,
            )
            tree.unresolved.append(entry)
        elif is_play_in(item):
            bucket = tree.east_play_in if entry.conference == "East" else tree.west_play_in
            bucket.append(entry)
        else:
            rounds = tree.east if entry.conference == "East" else tree.west
            rounds.setdefault(item.round_number, []).append(entry)

    logger.debug("Bracket organized", series=len(tree.all_series()))
    return tree
