"""Blog scraper - finds the newest post on the blog and extracts its metadata."""

import logging
import re
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from latest_card.config import Settings, get_settings
from latest_card.exceptions import ArticleFetchError
from latest_card.schemas.article import ArticleMeta

logger = logging.getLogger(__name__)

# Post permalinks look like /2024/07/22/some-title/
ARTICLE_HREF_RE = re.compile(r"/\d{4}/\d{2}/\d{2}/")

CREATED_AT_RE = re.compile(r"\d{4}-\d{1,2}-\d{1,2} \d{2}:\d{2}")
VIEWS_RE = re.compile(r"\|\s*([\d,]+)\s*\|")
COMMENTS_RE = re.compile(r"\|\s*[\d,]+\s*\|\s*(\d+)\s*\|")
WORDS_RE = re.compile(r"(\d+) 字")
READ_TIME_RE = re.compile(r"(\d+) 分钟")


def build_async_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured timeout and headers."""
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers={
            "User-Agent": settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
    )


def find_latest_link(html: str) -> tuple[str, str]:
    """
    Return (title, href) of the first dated post link on the homepage.

    Both are empty strings when the page has no post link.
    """
    soup = BeautifulSoup(html, "lxml")
    for anchor in soup.select('a[href*="/"]'):
        href = anchor.get("href", "")
        if href and ARTICLE_HREF_RE.search(href):
            return anchor.get_text().strip(), href
    return "", ""


def _first_group(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    return match.group(1) if match else ""


def parse_post_meta(html: str) -> dict[str, str]:
    """
    Extract date, counters and tags from an article page's `.post-meta` block.

    Missing values come back as empty strings.
    """
    soup = BeautifulSoup(html, "lxml")
    meta_text = "".join(el.get_text() for el in soup.select(".post-meta"))

    created_at = CREATED_AT_RE.search(meta_text)
    tags = [a.get_text().strip() for a in soup.select(".post-meta a")]

    return {
        "created_at": created_at.group(0) if created_at else "",
        "views": _first_group(VIEWS_RE, meta_text),
        "comments": _first_group(COMMENTS_RE, meta_text),
        "words": _first_group(WORDS_RE, meta_text),
        "read_time": _first_group(READ_TIME_RE, meta_text),
        "tags": ", ".join(tags),
    }


class BlogScraper:
    """
    Scrapes the blog homepage for its latest post, then the post page for metadata.

    The homepage request is retried; the article page is best effort and a
    failure there only leaves the metadata fields empty.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.http = http or build_async_client(self.settings)

    async def _fetch_html(self, url: str) -> str:
        response = await self.http.get(url)
        response.raise_for_status()
        return response.text

    async def _fetch_homepage(self) -> str:
        """Fetch the homepage, retrying transport and HTTP status errors."""
        url = self.settings.blog_url
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, self.settings.fetch_retries)),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type(httpx.HTTPError),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    html = await self._fetch_html(url)
        except httpx.HTTPError as e:
            logger.error("Homepage fetch failed after retries: %s", e)
            raise ArticleFetchError(url, e) from e
        return html

    async def fetch_latest_article(self) -> ArticleMeta:
        """
        Find the newest post and collect its metadata.

        Raises:
            ArticleFetchError: if the homepage cannot be fetched
        """
        homepage = await self._fetch_homepage()
        title, link = find_latest_link(homepage)
        if not link:
            logger.warning("No article link found on %s", self.settings.blog_url)
            return ArticleMeta(title=title, link=link)

        try:
            article_url = urljoin(self.settings.blog_url, link)
            fields = parse_post_meta(await self._fetch_html(article_url))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Could not fetch article page %s: %s", link, e)
            fields = {}

        logger.info("Latest article: %s (%s)", title, link)
        return ArticleMeta(title=title, link=link, **fields)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.http.aclose()


async def fetch_latest_article(settings: Settings | None = None) -> ArticleMeta:
    """Scrape the latest article with a throwaway client."""
    scraper = BlogScraper(settings)
    try:
        return await scraper.fetch_latest_article()
    finally:
        await scraper.close()
