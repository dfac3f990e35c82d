"""
Boundary validation for records entering the store.

Model validators already reject impossible shooting lines; these helpers turn
pydantic's errors into domain exceptions and add the rules that need context
from outside a single record (existing games, existing award winners).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from courtbook.engine.awards import max_winners
from courtbook.engine.season import complete_manual_totals
from courtbook.exceptions import (
    AwardCapacityError,
    ManualTotalsConflictError,
    StatValidationError,
)
from courtbook.models.award import Award
from courtbook.models.game import GameStatRecord
from courtbook.models.season import SeasonTotals

logger = structlog.get_logger(__name__)


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def validate_game_stats(game: GameStatRecord | Mapping[str, Any]) -> GameStatRecord:
    """
    Validate one game record and re-derive its result.

    Raises:
        StatValidationError: If made exceeds attempted for FG/3PT/FT, threes
            attempted exceed field goals attempted, or a field is malformed.
    """
    data = game.model_dump() if isinstance(game, GameStatRecord) else dict(game)
    try:
        return GameStatRecord.model_validate(data)
    except ValidationError as e:
        logger.warning("Game stats rejected", game_id=data.get("id"), error=_describe(e))
        raise StatValidationError(_describe(e)) from e


def validate_manual_totals(
    totals: SeasonTotals | Mapping[str, Any], has_games: bool
) -> SeasonTotals:
    """
    Validate hand-entered season totals.

    Raises:
        ManualTotalsConflictError: If the season already has game records.
        StatValidationError: If the totals themselves are inconsistent.
    """
    data = totals.model_dump() if isinstance(totals, SeasonTotals) else dict(totals)
    if has_games:
        raise ManualTotalsConflictError(
            f"Season '{data.get('season_id')}' already has games; "
            "manual totals would be ignored"
        )
    data["is_manual_entry"] = True
    try:
        validated = SeasonTotals.model_validate(data)
    except ValidationError as e:
        raise StatValidationError(_describe(e)) from e
    return complete_manual_totals(validated)


def validate_award_capacity(award: Award, existing: Iterable[Award]) -> None:
    """
    Refuse a winner beyond the award's per-season maximum.

    Awards outside the master list have no limit. Re-saving an existing
    award record does not count against the limit.

    Raises:
        AwardCapacityError: If the award is already at capacity.
    """
    limit = max_winners(award.award_name)
    if limit is None:
        return
    current = [
        other
        for other in existing
        if other.award_name == award.award_name
        and other.season_id == award.season_id
        and other.player_id == award.player_id
        and other.id != award.id
    ]
    if len(current) >= limit:
        raise AwardCapacityError(
            f"'{award.award_name}' already has {len(current)} of {limit} winners "
            f"for season '{award.season_id}'"
        )
