"""Tests for team lookup and conference resolution."""

import pytest


def test_known_team_conferences():
    from courtbook.engine.conference import resolve_conference

    assert resolve_conference("team-bos") == "East"
    assert resolve_conference("team-lal") == "West"
    assert resolve_conference(None) is None
    assert resolve_conference("") is None


def test_unknown_team_default_is_unresolved():
    from courtbook.engine.conference import resolve_conference

    assert resolve_conference("team-xyz") is None


@pytest.mark.parametrize(
    ("fallback", "expected"),
    [("east", "East"), ("west", "West"), ("unknown", None)],
)
def test_unknown_team_fallbacks(fallback, expected):
    from courtbook.engine.conference import resolve_conference

    assert resolve_conference("team-xyz", fallback) == expected


def test_unknown_team_error_policy():
    from courtbook.engine.conference import ConferenceFallback, resolve_conference
    from courtbook.exceptions import UnknownTeamError

    with pytest.raises(UnknownTeamError, match="team-xyz"):
        resolve_conference("team-xyz", ConferenceFallback.ERROR)


def test_team_row_conference_wins():
    """An explicit conference on a team row overrides the reference table."""
    from courtbook.engine.conference import resolve_conference
    from courtbook.models import TeamRecord

    teams = [
        TeamRecord(id="team-bos", name="Boston Celtics", conference="West"),
        TeamRecord(id="team-exp", name="Expansion", conference="East"),
    ]
    assert resolve_conference("team-bos", teams=teams) == "West"
    assert resolve_conference("team-exp", teams=teams) == "East"


def test_series_conference_first_known_team():
    from courtbook.engine.conference import resolve_series_conference

    assert resolve_series_conference("team-xyz", "team-mia") == "East"
    assert resolve_series_conference("team-den", "team-xyz") == "West"
    assert resolve_series_conference("team-xyz", "team-abc") is None
    assert resolve_series_conference("team-xyz", None, "west") == "West"


def test_series_without_teams_is_not_an_error():
    from courtbook.engine.conference import resolve_series_conference

    assert resolve_series_conference(None, None, "error") is None


def test_team_lookup_helpers():
    from courtbook.engine.conference import (
        get_team_by_id,
        get_team_by_name,
        team_abbreviation,
    )

    assert get_team_by_id("team-gsw").full_name == "Golden State Warriors"
    assert get_team_by_id("nope") is None
    assert get_team_by_name("  boston celtics ").id == "team-bos"
    assert get_team_by_name("Los Angeles Clippers").id == "team-lac"
    assert team_abbreviation("team-phx") == "PHX"
    assert team_abbreviation("Miami Heat") == "MIA"
    assert team_abbreviation("Seattle SuperSonics") == "Seattle SuperSonics"
    assert team_abbreviation(None) == "N/A"


def test_reference_table_has_thirty_teams():
    from courtbook.engine.conference import EASTERN_TEAM_IDS, NBA_TEAMS

    assert len(NBA_TEAMS) == 30
    assert len(EASTERN_TEAM_IDS) == 15
