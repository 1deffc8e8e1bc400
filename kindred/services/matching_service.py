"""
Kindred — Companion Compatibility Matching

Ranks a pool of companion profiles against a user's questionnaire answers:

  1. Resolve the age bucket to an inclusive [min, max] window.
  2. Hard-filter on gender and on age within [min - 2, max + 2].
  3. Score shared hobbies and shared personality traits by case-insensitive
     substring containment (either direction).
  4. Add the companion-type / relationship-goal bonus (+0.2), the
     "City, Region" location bonus (+0.1) and the strict age bonus (+0.1).
  5. Explain each match with up to three reasons and keep the top matches.

  score = (w_hobby × hobby_score) + (w_personality × personality_score) + bonus

Default weights: hobby=0.4, personality=0.4.  The final score is clamped to
[0, 1].  Every call is a pure function of its inputs.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Iterable, Mapping, Sequence

import structlog

from kindred.config import get_settings
from kindred.schemas.companion import CompanionMatch, CompanionProfile
from kindred.schemas.questionnaire import QuestionnaireData

logger = structlog.get_logger("kindred.matching_service")

# ──────────────────────────────────────────────────────────────────────────────
# Constants
# ──────────────────────────────────────────────────────────────────────────────

_AGE_RANGES: Mapping[str, tuple[int, int]] = MappingProxyType({
    "18-25": (18, 25),
    "26-35": (26, 35),
    "36-45": (36, 45),
    "46+": (46, 100),
})
_DEFAULT_AGE_RANGE: tuple[int, int] = (18, 100)

_AGE_SLACK = 2  # years either side of the bucket that survive filtering

# (companion_type, relationship_goals) -> personality keywords earning the bonus
_TYPE_GOAL_KEYWORDS: Mapping[tuple[str, str], tuple[str, ...]] = MappingProxyType({
    ("romantic", "romantic"): ("romantic", "passionate", "warm"),
    ("casual", "friendship"): ("friendly", "casual", "fun", "energetic"),
    ("spiritual", "support"): ("peaceful", "calm", "spiritual", "thoughtful"),
})

_TYPE_GOAL_BONUS = 0.2
_LOCATION_BONUS = 0.1
_AGE_MATCH_BONUS = 0.1

_HOBBY_REASON_THRESHOLD = 0.3
_PERSONALITY_REASON_THRESHOLD = 0.2
_MAX_REASONS = 3

_CREATIVE_HOBBIES = frozenset({"art", "music", "photography", "cooking"})

_NO_MATCHES_SUMMARY = (
    "We're still learning about your preferences. "
    "Browse all companions to find your perfect match!"
)


def parse_age_range(age_range: str) -> tuple[int, int]:
    """Map an age bucket label to an inclusive ``(min, max)`` window.

    Unknown labels fall back to ``(18, 100)``.
    """
    return _AGE_RANGES.get(age_range, _DEFAULT_AGE_RANGE)


def _related(a: str, b: str) -> bool:
    """True when either string contains the other, ignoring case."""
    a, b = a.lower(), b.lower()
    return a in b or b in a


def _shared(wanted: Iterable[str], offered: Sequence[str]) -> list[str]:
    """Return items of *wanted* related to at least one item of *offered*."""
    return [w for w in wanted if any(_related(w, o) for o in offered)]


class CompanionMatchingService:
    """Deterministic compatibility scoring over a companion pool.

    The service holds only configuration read at construction time; it keeps
    no state between calls and never mutates its inputs.
    """

    def __init__(self) -> None:
        settings = get_settings()
        self.w_hobby: float = settings.HOBBY_WEIGHT              # 0.4
        self.w_personality: float = settings.PERSONALITY_WEIGHT  # 0.4
        self.max_matches: int = settings.MAX_MATCHES             # 6

    # ── Public API ────────────────────────────────────────────────────────

    def find_matches(
        self,
        preferences: QuestionnaireData,
        companions: Sequence[CompanionProfile],
    ) -> list[CompanionMatch]:
        """Filter, score, explain and rank *companions* for *preferences*.

        Returns at most ``max_matches`` results ordered by
        ``compatibility_score`` descending; equal scores keep input order.
        """
        min_age, max_age = parse_age_range(preferences.age_range)

        candidates = [
            c for c in companions
            if self._passes_filters(preferences, c, min_age, max_age)
        ]

        scored: list[CompanionMatch] = []
        for companion in candidates:
            hobby_score = self._overlap_score(preferences.hobbies, companion.hobbies)
            personality_score = self._overlap_score(
                preferences.personality, companion.personality
            )
            bonus = self._compatibility_bonus(
                preferences.companion_type,
                preferences.relationship_goals,
                companion,
            )

            score = (
                self.w_hobby * hobby_score
                + self.w_personality * personality_score
                + bonus
            )
            if min_age <= companion.age <= max_age:
                score += _AGE_MATCH_BONUS
            score = min(1.0, max(0.0, score))

            scored.append(
                CompanionMatch(
                    **companion.model_dump(),
                    compatibility_score=score,
                    match_reasons=self._match_reasons(
                        preferences, companion, hobby_score, personality_score,
                        min_age, max_age,
                    ),
                )
            )

        ranked = sorted(scored, key=lambda m: m.compatibility_score, reverse=True)
        top = ranked[: self.max_matches]

        logger.info(
            "find_matches_complete",
            pool_size=len(companions),
            filtered=len(candidates),
            returned=len(top),
            top_score=round(top[0].compatibility_score, 4) if top else None,
        )
        return top

    def recommendation_summary(
        self,
        preferences: QuestionnaireData,
        matches: Sequence[CompanionMatch],
    ) -> str:
        """One-sentence summary of the match list for the results screen."""
        if not matches:
            return _NO_MATCHES_SUMMARY

        top = matches[0]
        # Halves round up: 12.5 -> 13.
        score_percent = int(math.floor(top.compatibility_score * 100 + 0.5))
        return (
            f"Based on your preferences for {preferences.companion_type} "
            f"companionship, we found {len(matches)} great matches! "
            f"Your top match is {top.name} with {score_percent}% compatibility."
        )

    # ── Filtering ─────────────────────────────────────────────────────────

    @staticmethod
    def _passes_filters(
        preferences: QuestionnaireData,
        companion: CompanionProfile,
        min_age: int,
        max_age: int,
    ) -> bool:
        gender = preferences.gender
        if gender != "any" and companion.gender.lower() != gender.lower():
            return False
        return (min_age - _AGE_SLACK) <= companion.age <= (max_age + _AGE_SLACK)

    # ── Scoring ───────────────────────────────────────────────────────────

    @staticmethod
    def _overlap_score(wanted: Sequence[str], offered: Sequence[str]) -> float:
        """Share of *wanted* items related to *offered*, in [0, 1].

        ``matched / max(len(wanted), len(offered))``; 0 when either side is
        empty.  Used for both hobbies and personality traits.
        """
        if not wanted or not offered:
            return 0.0
        matched = _shared(wanted, offered)
        return len(matched) / max(len(wanted), len(offered))

    @staticmethod
    def _compatibility_bonus(
        companion_type: str,
        relationship_goals: str,
        companion: CompanionProfile,
    ) -> float:
        bonus = 0.0

        # Pairs missing from the table contribute nothing.
        keywords = _TYPE_GOAL_KEYWORDS.get((companion_type, relationship_goals))
        if keywords and _shared(companion.personality, keywords):
            bonus += _TYPE_GOAL_BONUS

        if "," in companion.location:
            bonus += _LOCATION_BONUS

        return bonus

    # ── Explanations ──────────────────────────────────────────────────────

    @staticmethod
    def _match_reasons(
        preferences: QuestionnaireData,
        companion: CompanionProfile,
        hobby_score: float,
        personality_score: float,
        min_age: int,
        max_age: int,
    ) -> list[str]:
        reasons: list[str] = []

        if hobby_score > _HOBBY_REASON_THRESHOLD:
            shared_hobbies = _shared(preferences.hobbies, companion.hobbies)
            if shared_hobbies:
                reasons.append(
                    f"Shares your interest in {' and '.join(shared_hobbies[:2])}"
                )

        if personality_score > _PERSONALITY_REASON_THRESHOLD:
            shared_traits = _shared(preferences.personality, companion.personality)
            if shared_traits:
                reasons.append(f"Both {' and '.join(shared_traits[:2]).lower()}")

        if min_age <= companion.age <= max_age:
            reasons.append(f"Perfect age match at {companion.age}")

        if companion.location:
            reasons.append(f"Brings {companion.location} culture and perspective")

        bio = companion.bio.lower()
        if "passionate" in bio and preferences.relationship_goals == "romantic":
            reasons.append("Passionate and emotionally connected")

        if "creative" in bio and any(
            h.lower() in _CREATIVE_HOBBIES for h in preferences.hobbies
        ):
            reasons.append("Shares your creative spirit")

        return reasons[:_MAX_REASONS]
