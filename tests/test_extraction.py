from bs4 import BeautifulSoup

from rssforge.core.config import FALLBACK_SELECTORS
from rssforge.utils.extraction import (
    extract_by_heuristics, extract_with_selectors, looks_like_article_href,
)
from rssforge.utils.selectors import load_site_selectors, resolve_selectors

PAGE_URL = "https://example.com/news"


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestSelectorExtraction:
    def test_first_matching_selector_wins(self):
        soup = soup_of("""
        <article><a href="/a1">First story</a></article>
        <article><a href="/a2">Second story</a></article>
        <article><a href="/a1">First story again</a></article>
        <h2><a href="/h1">Headline only</a></h2>
        """)
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a", "h2 a"])
        assert outcome.tried_selectors == ["article a"]
        assert outcome.strategy == "selector"
        assert list(outcome.items) == ["https://example.com/a1", "https://example.com/a2"]
        # 같은 링크는 먼저 들어온 항목 유지
        assert outcome.items["https://example.com/a1"].title == "First story"

    def test_falls_through_empty_selectors(self):
        soup = soup_of('<h2><a href="https://example.com/x">Headline</a></h2>')
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a", ".card a", "h2 a"])
        assert outcome.tried_selectors == ["article a", ".card a", "h2 a"]
        assert list(outcome.items) == ["https://example.com/x"]

    def test_skips_non_http_and_empty(self):
        soup = soup_of("""
        <article>
          <a href="mailto:desk@example.com">Contact the desk</a>
          <a href="javascript:void(0)">Open menu</a>
          <a href="/no-title"></a>
          <a>No href at all</a>
        </article>
        """)
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a"])
        assert not outcome.found
        assert outcome.strategy is None

    def test_description_and_image(self):
        soup = soup_of("""
        <html><head>
          <meta name="description" content="Site description">
          <meta property="og:image" content="/og.png">
        </head><body>
          <article>
            <img src="/thumb.jpg">
            <a href="/story-1">Story one</a>
            <p>Lead paragraph.</p>
          </article>
          <div class="card" aria-label="Card story" data-x="1">
            <a href="/story-2" aria-label="Card story"></a>
          </div>
          <section><a href="/story-3">Story three</a></section>
        </body></html>
        """)
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a, .card a, section a"])
        items = outcome.items

        one = items["https://example.com/story-1"]
        assert one.description == "Lead paragraph."
        assert one.image == "https://example.com/thumb.jpg"

        two = items["https://example.com/story-2"]
        assert two.title == "Card story"
        assert two.description == "Site description"
        assert two.image == "https://example.com/og.png"

        three = items["https://example.com/story-3"]
        assert three.description == "Site description"

    def test_element_link_from_enclosing_anchor(self):
        soup = soup_of('<p><a href="/wrapped"><span class="headline">Wrapped headline</span></a></p>')
        outcome = extract_with_selectors(soup, PAGE_URL, [".headline"])
        assert list(outcome.items) == ["https://example.com/wrapped"]

    def test_unresolvable_href_is_skipped(self):
        soup = soup_of("""
        <article><a href="/good">A perfectly fine story</a></article>
        <article><a href="//[broken">Broken link text</a></article>
        <article><a href="http://[also-broken/x">Another broken link</a></article>
        """)
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a"])
        assert list(outcome.items) == ["https://example.com/good"]

    def test_unresolvable_image_is_dropped(self):
        soup = soup_of("""
        <html><head><meta property="og:image" content="//[og"></head><body>
          <article><img src="//[x"><a href="/good">A perfectly fine story</a></article>
          <section><a href="/other">Other story</a></section>
        </body></html>
        """)
        outcome = extract_with_selectors(soup, PAGE_URL, ["article a, section a"])
        assert outcome.items["https://example.com/good"].image is None
        assert outcome.items["https://example.com/other"].image is None

    def test_invalid_selector_matches_nothing(self):
        soup = soup_of('<article><a href="/a1">First story</a></article>')
        outcome = extract_with_selectors(soup, PAGE_URL, ["a[[[", "article a"])
        assert outcome.tried_selectors == ["a[[[", "article a"]
        assert list(outcome.items) == ["https://example.com/a1"]


class TestHeuristics:
    def test_accepts_article_like_links(self):
        soup = soup_of("""
        <a href="/news/2024/05/01/x">Big event happened today</a>
        <a href="/p/202405/abc">Six digit path story title</a>
        <a href="/about">About this website here</a>
        <a href="mailto:desk@example.com/news/">Mail the news desk now</a>
        <a href="/news/short">Short</a>
        """)
        outcome = extract_by_heuristics(soup, PAGE_URL, ["article a"])
        assert outcome.strategy == "heuristic"
        assert outcome.tried_selectors == ["article a"]
        assert list(outcome.items) == [
            "https://example.com/news/2024/05/01/x",
            "https://example.com/p/202405/abc",
        ]
        assert outcome.items["https://example.com/news/2024/05/01/x"].description == ""

    def test_image_from_anchor_or_article(self):
        soup = soup_of("""
        <article><img src="/lead.jpg"><a href="/article/1">Article with a lead image</a></article>
        <a href="/article/2"><img src="/inline.jpg">Article with inline image</a>
        """)
        outcome = extract_by_heuristics(soup, PAGE_URL)
        assert outcome.items["https://example.com/article/1"].image == "https://example.com/lead.jpg"
        assert outcome.items["https://example.com/article/2"].image == "https://example.com/inline.jpg"

    def test_unresolvable_links_and_images_are_skipped(self):
        soup = soup_of("""
        <a href="//[broken/news/2024/x">Broken news link title</a>
        <article><img src="//[x"><a href="/news/2024/05/01/ok">Fine news story title</a></article>
        """)
        outcome = extract_by_heuristics(soup, PAGE_URL)
        assert list(outcome.items) == ["https://example.com/news/2024/05/01/ok"]
        assert outcome.items["https://example.com/news/2024/05/01/ok"].image is None

    def test_nothing_found(self):
        outcome = extract_by_heuristics(soup_of("<p>No links</p>"), PAGE_URL, ["x"])
        assert not outcome.found
        assert outcome.tried_selectors == ["x"]

    def test_looks_like_article_href(self):
        assert looks_like_article_href("/2023/01/02/slug")
        assert looks_like_article_href("/world/article/abc")
        assert not looks_like_article_href("/contact")


class TestSelectorResolution:
    def test_explicit_selector_is_only_entry(self):
        assert resolve_selectors(PAGE_URL, ".story a", {"example.com": ["h2 a"]}) == [".story a"]

    def test_blank_selector_is_ignored(self):
        assert resolve_selectors(PAGE_URL, "   ", {}) == list(FALLBACK_SELECTORS)

    def test_site_table_by_host(self):
        table = {"example.com": ["h2 a", ".lead a"]}
        assert resolve_selectors(PAGE_URL, None, table) == ["h2 a", ".lead a"]

    def test_fallback_for_unknown_host(self):
        assert resolve_selectors("https://unknown.org/", None, {}) == list(FALLBACK_SELECTORS)
        assert FALLBACK_SELECTORS[0] == "article a"

    def test_load_site_selectors_overrides_by_host(self, tmp_path):
        path = tmp_path / "site_selectors.yaml"
        path.write_text(
            "sites:\n"
            "  Example.com:\n"
            "    - 'h2 a'\n"
            "  www.bbc.com: '.custom a'\n"
            "  empty.org: []\n",
            encoding="utf-8",
        )
        table = load_site_selectors(path)
        assert table["example.com"] == ["h2 a"]
        assert table["www.bbc.com"] == [".custom a"]
        assert "empty.org" not in table
        # 기본 항목은 유지
        assert "www3.nhk.or.jp" in table

    def test_load_site_selectors_missing_file(self, tmp_path):
        table = load_site_selectors(tmp_path / "nope.yaml")
        assert "www.bbc.com" in table
