"""API main router - aggregates all endpoint routers."""

from fastapi import APIRouter

from latest_card.api import card

api_router = APIRouter()

api_router.include_router(card.router, tags=["card"])
