"""Tests for bracket organization."""

import pytest


def _series(series_id, round_name, round_number, team1_id=None, team2_id=None, **extra):
    from courtbook.models import PlayoffSeries

    return PlayoffSeries(
        id=series_id,
        player_id="player-7",
        season_id="season-2425",
        round_name=round_name,
        round_number=round_number,
        team1_id=team1_id,
        team2_id=team2_id,
        **extra,
    )


@pytest.fixture
def teams():
    from courtbook.models import TeamRecord

    return [
        TeamRecord(id="team-bos", name="Boston Celtics", abbreviation="BOS"),
        TeamRecord(id="team-mia", name="Miami Heat", abbreviation="MIA"),
        TeamRecord(id="team-den", name="Denver Nuggets", abbreviation="DEN"),
        TeamRecord(id="team-lal", name="Los Angeles Lakers", abbreviation="LAL"),
    ]


def test_every_series_lands_in_one_bucket(teams):
    from courtbook.engine.bracket import organize_bracket

    series = [
        _series("east-r1", "Round 1", 1, "team-bos", "team-mia"),
        _series("west-r1", "Round 1", 1, "team-den", "team-lal"),
        _series("east-semi", "Conference Semifinals", 2, "team-bos", "team-nyk"),
        _series("west-pi", "Play-In Tournament", 0, "team-lal", "team-gsw"),
        _series("finals", "NBA Finals", 4, "team-bos", "team-den"),
        _series("mystery", "Round 1", 1, "team-xyz", "team-abc"),
    ]
    tree = organize_bracket(series, teams, [])

    assert [s.id for s in tree.finals] == ["finals"]
    assert [s.id for s in tree.east[1]] == ["east-r1"]
    assert [s.id for s in tree.east[2]] == ["east-semi"]
    assert [s.id for s in tree.west[1]] == ["west-r1"]
    assert [s.id for s in tree.west_play_in] == ["west-pi"]
    assert tree.east_play_in == []
    assert [s.id for s in tree.unresolved] == ["mystery"]

    all_ids = [s.id for s in tree.all_series()]
    assert sorted(all_ids) == sorted(s.id for s in series)


def test_unknown_team_with_east_fallback(teams):
    from courtbook.engine.bracket import organize_bracket

    tree = organize_bracket(
        [_series("mystery", "Round 1", 1, "team-xyz", "team-abc")],
        teams,
        [],
        conference_fallback="east",
    )
    assert [s.id for s in tree.east[1]] == ["mystery"]
    assert tree.unresolved == []


def test_finals_never_needs_a_conference(teams):
    """Finals with unknown teams stay in finals even under the error policy."""
    from courtbook.engine.bracket import organize_bracket

    tree = organize_bracket(
        [_series("finals", "NBA Finals", 4, "team-xyz", "team-abc")],
        teams,
        [],
        conference_fallback="error",
    )
    assert [s.id for s in tree.finals] == ["finals"]
    assert tree.finals[0].conference is None


def test_play_in_detected_by_name(teams):
    from courtbook.engine.bracket import is_play_in, organize_bracket

    named = _series("pi", "East Play-In", 1, "team-bos", "team-mia")
    assert is_play_in(named)

    tree = organize_bracket([named], teams, [])
    assert [s.id for s in tree.east_play_in] == ["pi"]
    assert tree.east == {}


def test_display_names_and_abbreviations(teams):
    from courtbook.engine.bracket import organize_bracket

    tree = organize_bracket(
        [
            _series("r1", "Round 1", 1, "team-bos", None),
            _series("r1b", "Round 1", 1, "team-phx", "team-sac", team1_name="Phoenix Suns"),
        ],
        teams,
        [],
    )
    first = tree.east[1][0]
    assert first.team1_display == "Boston Celtics"
    assert first.team1_abbrev == "BOS"
    assert first.team2_display == "TBD"

    second = tree.west[1][0]
    assert second.team1_display == "Phoenix Suns"
    assert second.team1_abbrev == "PHX"
    assert second.team2_display == "TBD"


def test_bracket_uses_live_winner(teams):
    """The displayed winner follows the win counts, not the stored field."""
    from courtbook.engine.bracket import organize_bracket

    stale = _series(
        "r1",
        "Round 1",
        1,
        "team-bos",
        "team-mia",
        team1_wins=3,
        team2_wins=2,
        winner_team_id="team-bos",
        is_complete=True,
    )
    entry = organize_bracket([stale], teams, []).east[1][0]
    assert entry.series.winner_team_id is None
    assert entry.series.is_complete is False


def test_games_matched_by_series_reference(teams, make_game):
    from courtbook.engine.bracket import organize_bracket

    games = [
        make_game(id="g1", is_playoff_game=True, playoff_series_id="r1"),
        make_game(id="g2", is_playoff_game=True, playoff_series_id="other"),
        make_game(id="g3", is_playoff_game=False, playoff_series_id="r1"),
    ]
    tree = organize_bracket(
        [_series("r1", "Round 1", 1, "team-bos", "team-mia")], teams, games
    )
    assert [g.id for g in tree.east[1][0].games] == ["g1"]


def test_games_matched_by_team_names(teams, make_game):
    """Legacy games without a series reference match on opponent and player team."""
    from courtbook.engine.bracket import organize_bracket

    games = [
        make_game(
            id="legacy",
            is_playoff_game=True,
            opponent_team_id="team-mia",
            opponent_team_name="miami heat",
        ),
        make_game(id="wrong-opp", is_playoff_game=True, opponent_team_name="Orlando Magic"),
    ]
    series = [_series("r1", "Round 1", 1, "team-bos", "team-mia")]

    tree = organize_bracket(series, teams, games, player_team_name="Boston Celtics")
    assert [g.id for g in tree.east[1][0].games] == ["legacy"]

    disabled = organize_bracket(
        series, teams, games, player_team_name="Boston Celtics", match_by_team_name=False
    )
    assert disabled.east[1][0].games == []


def test_tbd_never_matches(make_game):
    from courtbook.engine.bracket import organize_bracket

    games = [
        make_game(
            id="g", is_playoff_game=True, opponent_team_id=None, opponent_team_name="TBD"
        )
    ]
    tree = organize_bracket(
        [_series("r1", "Round 1", 1, "team-bos", None)], [], games, player_team_name="TBD"
    )
    assert tree.east[1][0].games == []


def test_empty_bracket():
    from courtbook.engine.bracket import organize_bracket

    tree = organize_bracket([], [], [])
    assert tree.is_empty
    assert tree.all_series() == []
