"""Card endpoint - serves the latest article as a PNG image."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from latest_card.config import get_settings
from latest_card.exceptions import ArticleFetchError
from latest_card.services.card_service import CardService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_card_service() -> CardService:
    """Dependency for the card service."""
    return CardService(get_settings())


@router.get(
    "/",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
async def latest_card(
    disable_cache: str | None = Query(default=None),
    service: CardService = Depends(get_card_service),
) -> Response:
    """
    Return the latest article card.

    - disable_cache: pass `true` to skip the cached image and re-scrape
    """
    try:
        image = await service.get_card(disable_cache=disable_cache == "true")
    except ArticleFetchError as e:
        logger.error("%s: %s", e.message, e.context.get("original_error"))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="获取文章失败",
        ) from e
    return Response(content=image, media_type="image/png")
