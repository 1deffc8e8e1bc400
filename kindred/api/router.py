"""
Kindred — Main API Router

Aggregates all sub-routers under a single prefix so that ``kindred.main``
can mount the entire API surface with one ``include_router`` call.
"""

from fastapi import APIRouter

from kindred.api import matching, mood

router = APIRouter()

router.include_router(matching.router, prefix="/match", tags=["Matching"])
router.include_router(mood.router, prefix="/mood", tags=["Mood"])
