"""Card service - cache lookup, scrape, render and store for one request."""

import logging
from datetime import datetime

from fastapi.concurrency import run_in_threadpool

from latest_card.config import Settings, get_settings
from latest_card.exceptions import CacheError
from latest_card.schemas.article import ArticleMeta, CacheMeta
from latest_card.services.blog_scraper import BlogScraper, fetch_latest_article
from latest_card.services.card_cache import CardCache
from latest_card.services.card_renderer import CardRenderer

logger = logging.getLogger(__name__)


def format_updated_at(moment: datetime) -> str:
    """Format a timestamp the way zh-CN locales print it, e.g. 2025/7/22 14:05:09."""
    return f"{moment.year}/{moment.month}/{moment.day} {moment:%H:%M:%S}"


class CardService:
    """Produces the latest-article card, serving from the disk cache when allowed."""

    def __init__(
        self,
        settings: Settings | None = None,
        scraper: BlogScraper | None = None,
        renderer: CardRenderer | None = None,
        cache: CardCache | None = None,
    ):
        self.settings = settings or get_settings()
        self.scraper = scraper
        self.renderer = renderer or CardRenderer(self.settings.assets_dir)
        self.cache = cache or CardCache(
            self.settings.cache_image_path, self.settings.cache_meta_path
        )

    async def get_card(self, disable_cache: bool = False) -> bytes:
        """
        Return PNG bytes for the latest article card.

        Raises:
            ArticleFetchError: if the blog homepage cannot be fetched
        """
        if not disable_cache:
            cached = await run_in_threadpool(self.cache.load)
            if cached:
                meta, image = cached
                logger.debug("Serving cached card from %s", meta.updated_at)
                return image

        article = await self._fetch_article()
        updated_at = format_updated_at(datetime.now())
        # Pillow drawing and file writes block
        image = await run_in_threadpool(self.renderer.render, article, updated_at)

        try:
            await run_in_threadpool(
                self.cache.save, CacheMeta(updated_at=updated_at, **article.model_dump()), image
            )
        except CacheError as e:
            logger.warning("Card cache not written: %s", e.to_dict())
        return image

    async def _fetch_article(self) -> ArticleMeta:
        if self.scraper is not None:
            return await self.scraper.fetch_latest_article()
        return await fetch_latest_article(self.settings)
