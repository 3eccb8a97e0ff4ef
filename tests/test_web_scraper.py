"""Instagram 抓取模块单元测试（不访问网络，使用假的 Playwright 对象）。"""

import pytest

from src import web_scraper
from src.web_scraper import (
    InstagramScraper,
    parse_bio,
    parse_like_count,
    parse_post,
    parse_post_links,
)

PROFILE_URL = "https://www.instagram.com/trail_runner/"

PROFILE_HTML = """
<html><body>
  <header><div class="-vDIg"><h1>Trail Runner</h1><span>Coffee lover and trail runner</span></div></header>
  <article>
    <a href="/p/AAA/"><img src="/thumb1.jpg"></a>
    <a href="/p/BBB/"><img src="/thumb2.jpg"></a>
    <a href="javascript:void(0)">more</a>
    <a href="https://www.instagram.com/p/CCC/"><img src="/thumb3.jpg"></a>
  </article>
  <a href="/explore/">Explore</a>
</body></html>
"""

POST_HTML = {
    "https://www.instagram.com/p/AAA/": """
        <html><body>
          <article><img src="https://cdn.example.com/a.jpg"></article>
          <h1>Sunrise summit #Hiking with @best_friend</h1>
          <section><span>1,234 likes</span></section>
        </body></html>
    """,
    "https://www.instagram.com/p/BBB/": """
        <html><body>
          <article><img src="/media/b.jpg"></article>
          <h1>Morning brew #coffee</h1>
        </body></html>
    """,
    "https://www.instagram.com/p/CCC/": "<html><body><p>nothing here</p></body></html>",
}


class TestParsePostLinks:
    """测试 parse_post_links()。"""

    def test_links_are_absolute_and_in_order(self):
        """测试链接转为绝对地址并保持顺序，跳过 javascript 链接。"""
        links = parse_post_links(PROFILE_HTML, PROFILE_URL)

        assert links == [
            "https://www.instagram.com/p/AAA/",
            "https://www.instagram.com/p/BBB/",
            "https://www.instagram.com/p/CCC/",
        ]

    def test_limit(self):
        """测试数量上限。"""
        assert len(parse_post_links(PROFILE_HTML, PROFILE_URL, limit=2)) == 2

    def test_links_outside_article_are_ignored(self):
        """测试 article 外的链接被忽略。"""
        assert "https://www.instagram.com/explore/" not in parse_post_links(PROFILE_HTML, PROFILE_URL)


class TestParsePost:
    """测试 parse_post()。"""

    def test_full_post(self):
        """测试提取 caption、图片、点赞数和 hashtag。"""
        url = "https://www.instagram.com/p/AAA/"

        post = parse_post(POST_HTML[url], base_url=url)

        assert post.caption == "Sunrise summit #Hiking with @best_friend"
        assert post.image_url == "https://cdn.example.com/a.jpg"
        assert post.likes == 1234
        assert post.hashtags == ["#Hiking"]
        assert post.mentions == ["@best_friend"]

    def test_relative_image_and_missing_likes(self):
        """测试相对图片地址和缺失的点赞数。"""
        url = "https://www.instagram.com/p/BBB/"

        post = parse_post(POST_HTML[url], base_url=url)

        assert post.image_url == "https://www.instagram.com/media/b.jpg"
        assert post.likes is None

    def test_empty_post(self):
        """测试没有任何内容的页面。"""
        post = parse_post(POST_HTML["https://www.instagram.com/p/CCC/"])

        assert post.caption == ""
        assert post.image_url is None
        assert post.hashtags == []


class TestParseHelpers:
    """测试 parse_bio() 和 parse_like_count()。"""

    def test_parse_bio(self):
        assert parse_bio(PROFILE_HTML) == "Coffee lover and trail runner"

    def test_parse_bio_missing(self):
        assert parse_bio("<html><body></body></html>") == ""

    @pytest.mark.parametrize("text,expected", [
        ("42", 42),
        ("1,234 likes", 1234),
        ("Liked by 7 others", 7),
        ("no likes yet", None),
        ("", None),
        (None, None),
    ])
    def test_parse_like_count(self, text, expected):
        assert parse_like_count(text) == expected


# ============================================================================
# Fake Playwright
# ============================================================================

class FakePage:
    def __init__(self, pages, *, selector_error=None):
        self.pages = pages
        self.selector_error = selector_error
        self.url = None
        self.visited = []

    def goto(self, url, wait_until=None, **kwargs):
        self.url = url
        self.visited.append((url, wait_until))

    def wait_for_selector(self, selector, timeout=None):
        self.waited_for = (selector, timeout)
        if self.selector_error:
            raise self.selector_error

    def content(self):
        return self.pages[self.url]


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False
        self.viewport = None

    def new_page(self, viewport=None):
        self.viewport = viewport
        return self.page

    def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser):
        self.browser = browser
        self.headless = None

    def launch(self, headless=True):
        self.headless = headless
        return self.browser


class FakePlaywright:
    def __init__(self, browser):
        self.chromium = FakeChromium(browser)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_browser(monkeypatch):
    """安装假的 sync_playwright，返回 (browser, page)。"""
    def _install(selector_error=None):
        page = FakePage({PROFILE_URL: PROFILE_HTML, **POST_HTML}, selector_error=selector_error)
        browser = FakeBrowser(page)
        monkeypatch.setattr(web_scraper, "sync_playwright", lambda: FakePlaywright(browser))
        return browser, page
    return _install


class TestInstagramScraper:
    """测试 InstagramScraper.scrape_profile()。"""

    def test_scrape_profile(self, fake_browser):
        """测试完整抓取流程：帖子按顺序访问，最后读取 bio。"""
        browser, page = fake_browser()

        profile = InstagramScraper(max_posts=10, ready_timeout_ms=5000).scrape_profile("trail_runner")

        assert profile is not None
        assert profile.username == "trail_runner"
        assert profile.bio == "Coffee lover and trail runner"
        assert [p.caption for p in profile.posts] == [
            "Sunrise summit #Hiking with @best_friend",
            "Morning brew #coffee",
            "",
        ]
        assert page.waited_for == ("article a", 5000)
        assert page.visited[0] == (PROFILE_URL, "networkidle")
        assert page.visited[-1] == (PROFILE_URL, None)
        assert browser.viewport == {"width": 1280, "height": 800}
        assert browser.closed is True

    def test_max_posts(self, fake_browser):
        """测试只访问前 max_posts 个帖子。"""
        browser, page = fake_browser()

        profile = InstagramScraper(max_posts=1).scrape_profile("trail_runner")

        assert len(profile.posts) == 1
        assert len(page.visited) == 3

    def test_failure_returns_none_and_closes_browser(self, fake_browser):
        """测试页面未就绪时返回 None，且浏览器被关闭。"""
        browser, _ = fake_browser(selector_error=TimeoutError("Timeout 5000ms exceeded"))

        profile = InstagramScraper().scrape_profile("trail_runner")

        assert profile is None
        assert browser.closed is True

    def test_launch_failure_returns_none(self, monkeypatch):
        """测试浏览器启动失败时返回 None。"""
        def _broken():
            raise RuntimeError("Executable doesn't exist")

        monkeypatch.setattr(web_scraper, "sync_playwright", _broken)

        assert InstagramScraper().scrape_profile("trail_runner") is None
