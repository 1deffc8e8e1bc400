"""
Kindred — Matching API

Endpoints for ranking companions against questionnaire answers, either from
the pre-built catalogue or from a caller-supplied candidate list.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.database import get_db
from kindred.models.companion import Companion
from kindred.schemas.companion import (
    CompanionProfile,
    MatchPreviewRequest,
    MatchResponse,
)
from kindred.schemas.questionnaire import QuestionnaireData
from kindred.services.matching_service import CompanionMatchingService

logger = structlog.get_logger("kindred.api.matching")

router = APIRouter()

# ── Service singletons ────────────────────────────────────────────────────────

_matching_service: CompanionMatchingService | None = None


def _get_matching_service() -> CompanionMatchingService:
    global _matching_service
    if _matching_service is None:
        _matching_service = CompanionMatchingService()
    return _matching_service


# ──────────────────────────────────────────────────────────────────────────────
# POST / — Match against the pre-built companion catalogue
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "",
    response_model=MatchResponse,
    status_code=status.HTTP_200_OK,
    summary="Find the best pre-built companions for a questionnaire",
)
async def find_matches(
    questionnaire: QuestionnaireData,
    db: AsyncSession = Depends(get_db),
) -> MatchResponse:
    """Score every pre-built companion and return the ranked top matches.

    Companions are loaded in creation order so that equal scores keep a
    stable, catalogue-defined ordering.
    """
    log = logger.bind(
        companion_type=questionnaire.companion_type,
        relationship_goals=questionnaire.relationship_goals,
    )
    log.info("find_matches_start")

    stmt = (
        select(Companion)
        .where(Companion.is_prebuilt.is_(True))
        .order_by(Companion.created_at, Companion.id)
    )
    try:
        result = await db.execute(stmt)
    except Exception:
        log.exception("companion_catalogue_load_failed")
        raise
    companions = [
        CompanionProfile.model_validate(row) for row in result.scalars().all()
    ]

    service = _get_matching_service()
    matches = service.find_matches(questionnaire, companions)
    summary = service.recommendation_summary(questionnaire, matches)

    log.info("find_matches_complete", catalogue_size=len(companions), matches=len(matches))
    return MatchResponse(matches=matches, summary=summary)


# ──────────────────────────────────────────────────────────────────────────────
# POST /preview — Match against caller-supplied candidates
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/preview",
    response_model=MatchResponse,
    status_code=status.HTTP_200_OK,
    summary="Rank caller-supplied companion profiles",
)
async def preview_matches(body: MatchPreviewRequest) -> MatchResponse:
    """Run the matcher on the given candidates without touching the store."""
    service = _get_matching_service()
    matches = service.find_matches(body.questionnaire, body.candidates)
    summary = service.recommendation_summary(body.questionnaire, matches)

    logger.info(
        "preview_matches_complete",
        candidates=len(body.candidates),
        matches=len(matches),
    )
    return MatchResponse(matches=matches, summary=summary)
