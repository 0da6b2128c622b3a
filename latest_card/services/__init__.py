"""Services package - scraping, rendering and caching of the article card."""

from latest_card.services.blog_scraper import BlogScraper, fetch_latest_article
from latest_card.services.card_cache import CardCache
from latest_card.services.card_renderer import CardRenderer
from latest_card.services.card_service import CardService

__all__ = [
    "BlogScraper",
    "fetch_latest_article",
    "CardCache",
    "CardRenderer",
    "CardService",
]
