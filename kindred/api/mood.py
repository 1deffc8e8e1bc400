"""
Kindred — Mood API

Endpoints for classifying message mood, recording detected moods, and
reading a user's mood history with a companion.
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.database import get_db
from kindred.schemas.mood import (
    MoodDetection,
    MoodDetectRequest,
    MoodEntryResponse,
    MoodTrackRequest,
    MoodTrend,
)
from kindred.services.mood_service import MoodService

logger = structlog.get_logger("kindred.api.mood")

router = APIRouter()

# ── Service singletons ────────────────────────────────────────────────────────

_mood_service: MoodService | None = None


def _get_mood_service() -> MoodService:
    global _mood_service
    if _mood_service is None:
        _mood_service = MoodService()
    return _mood_service


# ──────────────────────────────────────────────────────────────────────────────
# POST /detect — Classify a message
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/detect",
    response_model=MoodDetection,
    summary="Detect the mood of a message",
)
async def detect_mood(body: MoodDetectRequest) -> MoodDetection:
    return _get_mood_service().detect_mood(body.text)


# ──────────────────────────────────────────────────────────────────────────────
# POST /track — Detect and persist
# ──────────────────────────────────────────────────────────────────────────────

@router.post(
    "/track",
    response_model=MoodEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Detect a message's mood and record it",
)
async def track_mood(
    body: MoodTrackRequest,
    db: AsyncSession = Depends(get_db),
) -> MoodEntryResponse:
    """Classify ``body.text`` and store the result as an automatic entry."""
    service = _get_mood_service()
    detection = service.detect_mood(body.text)

    entry = await service.track_mood(
        db,
        user_id=body.user_id,
        companion_id=body.companion_id,
        user_companion_id=body.user_companion_id,
        mood=detection.mood,
        intensity=detection.intensity,
        message_context=body.text,
        detected_automatically=True,
    )
    return MoodEntryResponse.model_validate(entry)


# ──────────────────────────────────────────────────────────────────────────────
# GET /{user_id}/{companion_id}/recent
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{user_id}/{companion_id}/recent",
    response_model=list[MoodEntryResponse],
    summary="Most recent mood entries, newest first",
)
async def recent_moods(
    user_id: uuid.UUID,
    companion_id: uuid.UUID,
    limit: int | None = Query(default=None, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
) -> list[MoodEntryResponse]:
    entries = await _get_mood_service().fetch_recent_moods(
        db, user_id, companion_id, limit=limit
    )
    return [MoodEntryResponse.model_validate(e) for e in entries]


# ──────────────────────────────────────────────────────────────────────────────
# GET /{user_id}/{companion_id}/trends
# ──────────────────────────────────────────────────────────────────────────────

@router.get(
    "/{user_id}/{companion_id}/trends",
    response_model=list[MoodTrend],
    summary="Mood counts and average intensity over recent days",
)
async def mood_trends(
    user_id: uuid.UUID,
    companion_id: uuid.UUID,
    days: int | None = Query(default=None, ge=1, le=365),
    db: AsyncSession = Depends(get_db),
) -> list[MoodTrend]:
    trends = await _get_mood_service().fetch_mood_trends(
        db, user_id, companion_id, days=days
    )
    logger.info(
        "mood_trends_fetched",
        user_id=str(user_id),
        companion_id=str(companion_id),
        moods=len(trends),
    )
    return trends
