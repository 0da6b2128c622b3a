"""Shared fixtures: isolated settings and a fake blog served through httpx.MockTransport."""

from collections import Counter
from pathlib import Path

import httpx
import pytest

from latest_card.config import Settings

BLOG_URL = "https://modcxblog.cn/"

HOME_HTML = """
<html><body>
  <nav><a href="/about/">关于</a><a href="/archives/">Archives</a></nav>
  <main>
    <article><h2><a href="/2025/01/05/hello-world/"> 你好 World </a></h2></article>
    <article><h2><a href="/2024/07/22/older-post/">Older post</a></h2></article>
  </main>
</body></html>
"""

ARTICLE_HTML = """
<html><body>
  <div class="post-meta">
    2025-01-05 10:30 | 1,234 | 5 | 1200 字 | 6 分钟
    <a href="/tags/python/">Python</a>
    <a href="/tags/life/">生活</a>
  </div>
  <div class="post-content"><p>正文</p></div>
</body></html>
"""


class FakeBlog:
    """Routes requests to canned pages and counts hits per path."""

    def __init__(self, pages: dict[str, tuple[int, str]] | None = None):
        self.pages = pages if pages is not None else {
            "/": (200, HOME_HTML),
            "/2025/01/05/hello-world/": (200, ARTICLE_HTML),
        }
        self.hits: Counter[str] = Counter()

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.hits[path] += 1
        status, body = self.pages.get(path, (404, "not found"))
        return httpx.Response(status, text=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_blog() -> FakeBlog:
    return FakeBlog()


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    path = tmp_path / "assets"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path: Path, assets_dir: Path) -> Settings:
    return Settings(
        blog_url=BLOG_URL,
        cache_dir=tmp_path / "cache",
        assets_dir=assets_dir,
        fetch_retries=1,
    )
