from fastapi import APIRouter

from creohub.presentation.api.v1 import auth, creators, currency, pricing, subscription

router = APIRouter()
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(creators.router, prefix="/creators", tags=["creators"])
router.include_router(pricing.router, prefix="/pricing", tags=["pricing"])
router.include_router(currency.router, prefix="/currency", tags=["currency"])
router.include_router(subscription.router, prefix="/subscription", tags=["subscription"])
