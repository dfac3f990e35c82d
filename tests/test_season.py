"""Tests for season aggregation."""

import pytest


@pytest.fixture
def manual_totals():
    from courtbook.models import SeasonTotals, StatLine

    return SeasonTotals(
        player_id="player-7",
        season_id="season-2425",
        is_manual_entry=True,
        games_played=70,
        games_started=70,
        totals=StatLine(points=1800, rebounds=400),
        averages=StatLine(points=25.7, rebounds=5.7),
    )


def test_two_games_sum_and_average(make_game):
    """Two games of 20 and 30 points: total 50, average 25, FG% from summed counts."""
    from courtbook.engine.season import compute_season_totals

    games = [
        make_game(points=20, fg_made=5, fg_attempted=10),
        make_game(points=30, fg_made=7, fg_attempted=15),
    ]
    totals = compute_season_totals("player-7", "season-2425", games)

    assert totals is not None
    assert totals.is_manual_entry is False
    assert totals.games_played == 2
    assert totals.totals.points == 50
    assert totals.averages.points == 25.0
    assert totals.totals.fg_made == 12
    assert totals.totals.fg_attempted == 25
    assert totals.fg_percentage == 0.48


def test_percentage_is_not_mean_of_game_percentages(make_game):
    """1/1 and 1/9 is 0.2, not the mean of 1.0 and 0.111."""
    from courtbook.engine.season import compute_season_totals

    games = [
        make_game(fg_made=1, fg_attempted=1),
        make_game(fg_made=1, fg_attempted=9),
    ]
    totals = compute_season_totals("player-7", "season-2425", games)
    assert totals.fg_percentage == 0.2


def test_games_override_manual_totals(make_game, manual_totals):
    """When games exist, the manual row is ignored."""
    from courtbook.engine.season import compute_season_totals

    totals = compute_season_totals(
        "player-7", "season-2425", [make_game(points=12)], manual_override=manual_totals
    )
    assert totals.is_manual_entry is False
    assert totals.games_played == 1
    assert totals.totals.points == 12


def test_manual_totals_used_without_games(manual_totals):
    """Without games, the manual row is returned as a copy."""
    from courtbook.engine.season import compute_season_totals

    totals = compute_season_totals("player-7", "season-2425", [], manual_override=manual_totals)

    assert totals == manual_totals
    assert totals is not manual_totals
    assert totals.is_manual_entry is True


def test_manual_totals_for_other_season_ignored(manual_totals):
    from courtbook.engine.season import compute_season_totals

    assert compute_season_totals("player-7", "season-2324", [], manual_totals) is None


def test_no_data_returns_none():
    from courtbook.engine.season import compute_season_totals

    assert compute_season_totals("player-7", "season-2425", []) is None


def test_games_filtered_by_player_and_season(make_game):
    from courtbook.engine.season import compute_season_totals

    games = [
        make_game(points=10),
        make_game(points=99, season_id="season-2324"),
        make_game(points=99, player_id="player-8"),
    ]
    totals = compute_season_totals("player-7", "season-2425", games)
    assert totals.games_played == 1
    assert totals.totals.points == 10


def test_unrecorded_stats_stay_absent(make_game):
    """A stat no game recorded is None, never 0."""
    from courtbook.engine.season import compute_season_totals

    totals = compute_season_totals("player-7", "season-2425", [make_game(points=18)])
    assert totals.totals.rebounds is None
    assert totals.averages.rebounds is None
    assert totals.three_pt_percentage is None


def test_shooting_pair_recorded_in_some_games(make_game):
    """Made and attempted tracked in different games still sum as-is."""
    from courtbook.engine.season import compute_season_totals

    games = [make_game(fg_made=5), make_game(fg_made=3, fg_attempted=4)]
    totals = compute_season_totals("player-7", "season-2425", games)

    assert totals.totals.fg_made == 8
    assert totals.totals.fg_attempted == 4
    assert totals.fg_percentage == 2.0
    assert totals.averages.fg_made == 4.0
    assert totals.averages.fg_attempted == 2.0


def test_threes_attempted_above_field_goals_across_games(make_game):
    from courtbook.engine.season import compute_season_totals

    games = [
        make_game(threes_made=2, threes_attempted=5),
        make_game(fg_made=1, fg_attempted=2),
    ]
    totals = compute_season_totals("player-7", "season-2425", games)

    assert totals.totals.threes_attempted == 5
    assert totals.totals.fg_attempted == 2
    assert totals.three_pt_percentage == 0.4
    assert totals.fg_percentage == 0.5
    assert totals.ft_percentage is None


def test_games_started_from_started_flag(make_game):
    from courtbook.engine.season import aggregate_games

    games = [make_game(started=True), make_game(started=False), make_game(started=True)]
    assert aggregate_games(games).games_started == 2

    # Unknown when no game recorded it
    assert aggregate_games([make_game(), make_game()]).games_started is None


def test_double_and_triple_doubles_counted(make_game):
    from courtbook.engine.season import compute_season_totals

    games = [
        make_game(points=30, rebounds=10, assists=10),
        make_game(points=20, rebounds=12),
        make_game(points=9),
    ]
    totals = compute_season_totals("player-7", "season-2425", games)
    assert totals.double_doubles == 2
    assert totals.triple_doubles == 1


def test_averages_rounded_to_three_decimals(make_game):
    from courtbook.engine.season import aggregate_games

    games = [make_game(points=10), make_game(points=10), make_game(points=11)]
    assert aggregate_games(games).averages.points == 10.333


def test_season_by_season(make_game, manual_totals):
    """Seasons keep input order; empty seasons are skipped; awards attach."""
    from courtbook.engine.season import season_by_season
    from courtbook.models import Award, Season

    seasons = [
        Season(id="season-2526", year_start=2025, year_end=2026),
        Season(id="season-2425", year_start=2024, year_end=2025),
        Season(id="season-2324", year_start=2023, year_end=2024),
    ]
    games = [make_game(season_id="season-2324", points=22)]
    awards = [Award(id="a1", season_id="season-2425", award_name="MVP")]

    rows = season_by_season("player-7", seasons, games, [manual_totals], awards)

    assert [row.season.id for row in rows] == ["season-2425", "season-2324"]
    assert rows[0].totals.is_manual_entry is True
    assert rows[0].awards == awards
    assert rows[1].totals.totals.points == 22
    assert rows[1].awards == []


def test_complete_manual_totals_fills_blanks():
    from courtbook.engine.season import complete_manual_totals
    from courtbook.models import SeasonTotals, StatLine

    totals = SeasonTotals(
        player_id="player-7",
        season_id="season-2324",
        is_manual_entry=True,
        games_played=4,
        totals=StatLine(points=100, rebounds=30, fg_made=12, fg_attempted=25),
        averages=StatLine(points=26.0),
    )
    completed = complete_manual_totals(totals)

    assert completed.averages.points == 26.0
    assert completed.averages.rebounds == 7.5
    assert completed.fg_percentage == 0.48
    assert completed.ft_percentage is None
