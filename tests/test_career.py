"""Tests for career aggregation and game highs."""

import pytest


def _season(season_id, games_played, **totals):
    from courtbook.models import SeasonTotals, StatLine

    dd = totals.pop("double_doubles", 0)
    td = totals.pop("triple_doubles", 0)
    return SeasonTotals(
        player_id="player-7",
        season_id=season_id,
        games_played=games_played,
        games_started=totals.pop("games_started", None),
        totals=StatLine(**totals),
        double_doubles=dd,
        triple_doubles=td,
    )


def test_career_sums_seasons():
    from courtbook.engine.career import compute_career_totals

    career = compute_career_totals(
        [
            _season("s1", 60, points=1500, fg_made=550, fg_attempted=1200, double_doubles=10),
            _season(
                "s2",
                40,
                points=900,
                fg_made=350,
                fg_attempted=700,
                double_doubles=5,
                triple_doubles=2,
            ),
        ]
    )

    assert career.player_id == "player-7"
    assert career.seasons == 2
    assert career.games_played == 100
    assert career.totals.points == 2400
    assert career.averages.points == 24.0
    assert career.fg_percentage == 0.474
    assert career.double_doubles == 15
    assert career.triple_doubles == 2


def test_career_stat_absent_everywhere_stays_absent():
    from courtbook.engine.career import compute_career_totals

    career = compute_career_totals([_season("s1", 10, points=100)])
    assert career.totals.rebounds is None
    assert career.averages.rebounds is None


def test_career_over_partially_tracked_season(make_game):
    from courtbook.engine.career import compute_career_totals
    from courtbook.engine.season import compute_season_totals

    partial = compute_season_totals(
        "player-7",
        "season-2425",
        [make_game(fg_made=5, threes_attempted=3), make_game(fg_made=3, fg_attempted=4)],
    )
    career = compute_career_totals([_season("s1", 10, fg_made=40, fg_attempted=100), partial])

    assert career.games_played == 12
    assert career.totals.fg_made == 48
    assert career.totals.fg_attempted == 104
    assert career.totals.threes_attempted == 3
    assert career.fg_percentage == 0.462
    assert career.three_pt_percentage is None


def test_career_with_no_seasons():
    from courtbook.engine.career import compute_career_totals

    career = compute_career_totals([])
    assert career.games_played == 0
    assert career.averages.points is None
    assert career.fg_percentage is None


def test_career_games_started_treats_unknown_as_zero():
    from courtbook.engine.career import compute_career_totals

    career = compute_career_totals(
        [_season("s1", 10, games_started=8), _season("s2", 5)]
    )
    assert career.games_started == 8


def test_game_highs_ties_most_recent_first(make_game):
    from courtbook.engine.career import game_highs

    games = [
        make_game(id="a", game_date="2024-11-01", points=40, rebounds=5),
        make_game(id="b", game_date="2024-12-15", points=40, rebounds=12),
        make_game(id="c", game_date="2024-11-20", points=33),
    ]
    highs = game_highs(games)

    assert highs["points"].value == 40
    assert [g.game_id for g in highs["points"].games] == ["b", "a"]
    assert highs["rebounds"].value == 12
    # No assists recorded anywhere
    assert "assists" not in highs


def test_game_highs_zero_is_not_a_high(make_game):
    from courtbook.engine.career import game_highs

    highs = game_highs([make_game(blocks=0, points=12)])
    assert "blocks" not in highs
    assert highs["points"].games[0].opponent == "New York Knicks"


@pytest.mark.parametrize(
    ("manual", "expected_points"),
    [({"points": 48}, 48), ({"points": 30}, 41), ({}, 41)],
)
def test_merge_career_highs(make_game, manual, expected_points):
    from courtbook.engine.career import merge_career_highs

    merged = merge_career_highs(manual, [make_game(points=41, assists=9)])
    assert merged["points"] == expected_points
    assert merged["assists"] == 9
