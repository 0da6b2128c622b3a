"""Tests for homepage/article scraping."""

import asyncio

import pytest

from latest_card.exceptions import ArticleFetchError
from latest_card.services.blog_scraper import BlogScraper, find_latest_link, parse_post_meta

from .conftest import ARTICLE_HTML, HOME_HTML, FakeBlog


def scrape(settings, blog: FakeBlog):
    async def _run():
        scraper = BlogScraper(settings, http=blog.client())
        try:
            return await scraper.fetch_latest_article()
        finally:
            await scraper.close()

    return asyncio.run(_run())


class TestFindLatestLink:
    def test_first_dated_link_wins(self) -> None:
        title, link = find_latest_link(HOME_HTML)
        assert title == "你好 World"
        assert link == "/2025/01/05/hello-world/"

    def test_no_dated_link(self) -> None:
        assert find_latest_link('<a href="/about/">About</a><a href="#top">Top</a>') == ("", "")

    def test_absolute_links_match(self) -> None:
        html = '<a href="https://modcxblog.cn/2023/12/31/nye/">NYE</a>'
        assert find_latest_link(html) == ("NYE", "https://modcxblog.cn/2023/12/31/nye/")


class TestParsePostMeta:
    def test_all_fields(self) -> None:
        meta = parse_post_meta(ARTICLE_HTML)
        assert meta == {
            "created_at": "2025-01-05 10:30",
            "views": "1,234",
            "comments": "5",
            "words": "1200",
            "read_time": "6",
            "tags": "Python, 生活",
        }

    def test_missing_fields_are_empty(self) -> None:
        meta = parse_post_meta('<div class="post-meta">2024-7-2 08:15</div>')
        assert meta["created_at"] == "2024-7-2 08:15"
        assert meta["views"] == ""
        assert meta["comments"] == ""
        assert meta["words"] == ""
        assert meta["read_time"] == ""
        assert meta["tags"] == ""

    def test_no_post_meta_block(self) -> None:
        assert all(value == "" for value in parse_post_meta("<p>nothing</p>").values())


class TestBlogScraper:
    def test_fetch_latest_article(self, settings, fake_blog) -> None:
        article = scrape(settings, fake_blog)

        assert article.title == "你好 World"
        assert article.link == "/2025/01/05/hello-world/"
        assert article.created_at == "2025-01-05 10:30"
        assert article.views == "1,234"
        assert article.comments == "5"
        assert article.words == "1200"
        assert article.read_time == "6"
        assert article.tags == "Python, 生活"
        assert fake_blog.hits["/2025/01/05/hello-world/"] == 1

    def test_article_page_failure_keeps_title(self, settings) -> None:
        blog = FakeBlog({"/": (200, HOME_HTML)})

        article = scrape(settings, blog)

        assert article.title == "你好 World"
        assert article.created_at == ""
        assert article.tags == ""

    def test_homepage_without_posts(self, settings) -> None:
        blog = FakeBlog({"/": (200, "<html><body>empty</body></html>")})

        article = scrape(settings, blog)

        assert article.title == ""
        assert article.link == ""
        assert set(blog.hits) == {"/"}

    def test_malformed_article_href_keeps_title(self, settings) -> None:
        blog = FakeBlog({"/": (200, '<a href="http://[bad/2024/01/01/x/">T</a>')})

        article = scrape(settings, blog)

        assert article.title == "T"
        assert article.link == "http://[bad/2024/01/01/x/"
        assert article.created_at == ""
        assert article.views == ""
        assert article.tags == ""

    def test_homepage_failure_raises(self, settings) -> None:
        blog = FakeBlog({"/": (503, "down")})

        with pytest.raises(ArticleFetchError) as exc_info:
            scrape(settings, blog)

        assert exc_info.value.context["url"] == settings.blog_url

    def test_homepage_retried(self, settings) -> None:
        settings.fetch_retries = 2
        blog = FakeBlog({"/": (500, "boom")})

        with pytest.raises(ArticleFetchError):
            scrape(settings, blog)

        assert blog.hits["/"] == 2
