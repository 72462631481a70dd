# holdings_engine/api/v1/router.py

from fastapi import APIRouter
from holdings_engine.api.v1.holdings import router as holdings_router

# Create a main router for API version 1
router = APIRouter()

router.include_router(holdings_router, tags=["Holdings"])
