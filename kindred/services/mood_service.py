"""
Kindred — Mood Detection & Mood History

Detection is a first-match-wins keyword scan over a fixed, ordered mood
table.  The table order is part of the behaviour: a message containing both
"happy" and "excited" keywords resolves to ``happy`` because it is declared
first.  Emphasis raises the base intensity:

  +1 (max 10) when the message has more than two '!'
  +1 (max 10) when more than half of its characters are uppercase letters

Messages with no keyword hit are ``neutral`` at intensity 5.

Persistence helpers store detected moods in ``mood_entries`` and aggregate
them into recent-history and trend views.
"""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timedelta, timezone

import structlog
from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from kindred.config import get_settings
from kindred.models.mood import MoodEntry
from kindred.schemas.mood import MoodDetection, MoodTrend, MoodType

logger = structlog.get_logger("kindred.mood_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

# (mood, keywords, base intensity) in evaluation order.
_MOOD_TABLE: tuple[tuple[MoodType, tuple[str, ...], int], ...] = (
    (
        MoodType.HAPPY,
        ("happy", "joy", "glad", "wonderful", "great", "amazing", "fantastic",
         "excited", "love", "awesome"),
        7,
    ),
    (
        MoodType.EXCITED,
        ("excited", "thrilled", "pumped", "can't wait", "omg", "!!!", "woo", "yay"),
        8,
    ),
    (
        MoodType.LOVED,
        ("love you", "adore", "cherish", "care about", "miss you",
         "thinking of you"),
        8,
    ),
    (
        MoodType.SAD,
        ("sad", "down", "depressed", "unhappy", "miserable", "crying", "tears",
         "upset", "hurt"),
        6,
    ),
    (
        MoodType.LONELY,
        ("lonely", "alone", "isolated", "nobody", "missing", "empty"),
        7,
    ),
    (
        MoodType.ANXIOUS,
        ("anxious", "worried", "nervous", "scared", "afraid", "stress", "panic",
         "overwhelmed"),
        7,
    ),
    (
        MoodType.STRESSED,
        ("stressed", "pressure", "overwhelmed", "tired", "exhausted", "burnout"),
        6,
    ),
    (
        MoodType.ANGRY,
        ("angry", "mad", "furious", "annoyed", "frustrated", "rage", "hate"),
        7,
    ),
    (
        MoodType.CALM,
        ("calm", "peaceful", "relaxed", "content", "serene", "tranquil"),
        5,
    ),
)

_NEUTRAL_INTENSITY = 5
_MAX_INTENSITY = 10
_EXCLAMATION_THRESHOLD = 2
_CAPS_RATIO_THRESHOLD = 0.5

_UPPERCASE_RE = re.compile(r"[A-Z]")


class MoodService:
    """Keyword mood classifier plus the ``mood_entries`` store helpers."""

    def __init__(self) -> None:
        settings = get_settings()
        self.recent_limit: int = settings.MOOD_RECENT_LIMIT
        self.trend_days: int = settings.MOOD_TREND_DAYS

    # ── Detection ─────────────────────────────────────────────────────────

    @staticmethod
    def detect_mood(text: str) -> MoodDetection:
        """Classify *text* into a mood and a 1–10 intensity.

        Never raises; empty or unmatched text is ``neutral`` at 5.
        """
        lower_text = text.lower()

        for mood, keywords, base_intensity in _MOOD_TABLE:
            if not any(keyword in lower_text for keyword in keywords):
                continue

            intensity = base_intensity
            if text.count("!") > _EXCLAMATION_THRESHOLD:
                intensity = min(_MAX_INTENSITY, intensity + 1)
            caps_ratio = len(_UPPERCASE_RE.findall(text)) / len(text)
            if caps_ratio > _CAPS_RATIO_THRESHOLD:
                intensity = min(_MAX_INTENSITY, intensity + 1)

            return MoodDetection(mood=mood, intensity=intensity)

        return MoodDetection(mood=MoodType.NEUTRAL, intensity=_NEUTRAL_INTENSITY)

    # ── Persistence ───────────────────────────────────────────────────────

    async def track_mood(
        self,
        db_session: AsyncSession,
        user_id: uuid.UUID,
        companion_id: uuid.UUID,
        user_companion_id: uuid.UUID,
        mood: MoodType,
        intensity: int,
        message_context: str | None = None,
        detected_automatically: bool = True,
    ) -> MoodEntry:
        """Insert a mood entry and return the refreshed row."""
        log = logger.bind(user_id=str(user_id), companion_id=str(companion_id))

        entry = MoodEntry(
            user_id=user_id,
            companion_id=companion_id,
            user_companion_id=user_companion_id,
            mood_type=MoodType(mood).value,
            intensity=intensity,
            message_context=message_context,
            detected_automatically=detected_automatically,
        )
        db_session.add(entry)
        try:
            await db_session.flush()
            await db_session.refresh(entry)
        except Exception:
            log.exception("mood_track_failed", mood=MoodType(mood).value)
            raise

        log.info(
            "mood_tracked",
            mood=entry.mood_type,
            intensity=intensity,
            automatic=detected_automatically,
        )
        return entry

    async def fetch_recent_moods(
        self,
        db_session: AsyncSession,
        user_id: uuid.UUID,
        companion_id: uuid.UUID,
        limit: int | None = None,
    ) -> list[MoodEntry]:
        """Most recent mood entries for a user/companion pair, newest first."""
        stmt = (
            select(MoodEntry)
            .where(
                MoodEntry.user_id == user_id,
                MoodEntry.companion_id == companion_id,
            )
            .order_by(desc(MoodEntry.created_at))
            .limit(limit or self.recent_limit)
        )
        result = await db_session.execute(stmt)
        return list(result.scalars().all())

    async def fetch_mood_trends(
        self,
        db_session: AsyncSession,
        user_id: uuid.UUID,
        companion_id: uuid.UUID,
        days: int | None = None,
    ) -> list[MoodTrend]:
        """Count and average intensity per mood over the last *days* days."""
        since = datetime.now(timezone.utc) - timedelta(days=days or self.trend_days)

        count_col = func.count(MoodEntry.id).label("entry_count")
        stmt = (
            select(
                MoodEntry.mood_type,
                count_col,
                func.avg(MoodEntry.intensity).label("avg_intensity"),
            )
            .where(
                MoodEntry.user_id == user_id,
                MoodEntry.companion_id == companion_id,
                MoodEntry.created_at >= since,
            )
            .group_by(MoodEntry.mood_type)
            .order_by(desc(count_col))
        )
        result = await db_session.execute(stmt)

        return [
            MoodTrend(
                mood_type=row.mood_type,
                count=row.entry_count,
                avg_intensity=round(float(row.avg_intensity), 2),
            )
            for row in result.all()
        ]
