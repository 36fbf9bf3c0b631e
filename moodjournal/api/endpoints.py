from fastapi import APIRouter

from moodjournal.api.routes import analytics, checkin, entries, profile


router = APIRouter()

router.include_router(profile.router)
router.include_router(entries.router)
router.include_router(analytics.router)
router.include_router(checkin.router)
