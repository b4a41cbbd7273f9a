from fastapi import APIRouter

from .features.check_rate_limit.router import router as check_rate_limit_router
from .features.cleanup_rate_limits.router import router as cleanup_rate_limits_router
from .features.list_wishes.router import router as list_wishes_router
from .features.submit_wish.router import router as submit_wish_router

router = APIRouter()

router.include_router(submit_wish_router)
router.include_router(check_rate_limit_router)
router.include_router(cleanup_rate_limits_router)
# last, so its path parameter never shadows the fixed paths
router.include_router(list_wishes_router)
