from fastapi import APIRouter

from .features.response_summary.router import router as response_summary_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(submit_rsvp_router)
router.include_router(response_summary_router)
