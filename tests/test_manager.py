"""Tests for sitemapgen.services.manager.SitemapManager."""

from xml.etree import ElementTree

from sitemapgen.models.records import ContentRecord, SitemapEntry
from sitemapgen.services.manager import IMAGE_NS, SITEMAP_NS, SitemapManager
from sitemapgen.services.mapper import SitemapSource

_SITE = "https://example.com"
_NS = {"sm": SITEMAP_NS, "image": IMAGE_NS}


def _entry(path: str, **metadata) -> SitemapEntry:
    return SitemapEntry(
        url=_SITE + path,
        record=ContentRecord(slug=path, path=path, metadata=metadata),
    )


def _manager() -> SitemapManager:
    return SitemapManager(_SITE, "/sitemap.xml", "/sitemap-:resource.xml")


class TestSitemapXml:
    def test_declarations_reference_stylesheet(self):
        xml = _manager().get_sitemap_xml("pages")
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert '<?xml-stylesheet type="text/xsl" href="https://example.com/sitemap.xsl"?>' in xml

    def test_urls_keep_insertion_order(self):
        manager = _manager()
        for path in ("/b/", "/a/", "/c/"):
            manager.add_urls("pages", _entry(path))

        root = ElementTree.fromstring(manager.get_sitemap_xml("pages"))
        locs = [el.text for el in root.findall("sm:url/sm:loc", _NS)]
        assert locs == ["https://example.com/b/", "https://example.com/a/", "https://example.com/c/"]

    def test_unknown_bucket_renders_empty_urlset(self):
        root = ElementTree.fromstring(_manager().get_sitemap_xml("missing"))
        assert root.tag == f"{{{SITEMAP_NS}}}urlset"
        assert root.findall("sm:url", _NS) == []

    def test_lastmod_prefers_updated_at(self):
        manager = _manager()
        manager.add_urls(
            "posts",
            _entry("/p/", published_at="2020-01-01T00:00:00.000Z", updated_at="2021-06-15T12:30:00.000Z"),
        )
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts"))
        assert root.find("sm:url/sm:lastmod", _NS).text == "2021-06-15T12:30:00.000Z"

    def test_lastmod_from_date_only_value(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/p/", published_at="2020-01-02"))
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts"))
        assert root.find("sm:url/sm:lastmod", _NS).text == "2020-01-02T00:00:00.000Z"

    def test_unparseable_date_is_skipped(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/p/", published_at="last tuesday"))
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts"))
        assert root.find("sm:url/sm:lastmod", _NS) is None

    def test_feature_image_is_listed(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/p/", feature_image="/img/cover.png"))
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts"))
        assert root.find("sm:url/image:image/image:loc", _NS).text == "https://example.com/img/cover.png"

    def test_priority_from_source(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/p/"))
        source = SitemapSource(name="posts", sitemap="posts", priority=0.8)
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts", source))
        assert root.find("sm:url/sm:priority", _NS).text == "0.8"

    def test_no_priority_by_default(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/p/"))
        root = ElementTree.fromstring(manager.get_sitemap_xml("posts"))
        assert root.find("sm:url/sm:priority", _NS) is None

    def test_loc_is_escaped(self):
        manager = _manager()
        manager.add_urls("pages", _entry("/search/?q=a&b=c"))
        assert "q=a&amp;b=c" in manager.get_sitemap_xml("pages")


class TestIndexXml:
    def test_lists_one_file_per_source(self):
        sources = [
            SitemapSource(name="posts", sitemap="posts"),
            SitemapSource(name="articles", sitemap="pages"),
        ]
        root = ElementTree.fromstring(_manager().get_index_xml(sources))
        locs = [el.text for el in root.findall("sm:sitemap/sm:loc", _NS)]
        assert locs == [
            "https://example.com/sitemap-posts.xml",
            "https://example.com/sitemap-articles.xml",
        ]

    def test_lastmod_is_newest_entry(self):
        manager = _manager()
        manager.add_urls("posts", _entry("/a/", published_at="2020-01-01"))
        manager.add_urls("posts", _entry("/b/", published_at="2022-03-04"))
        manager.add_urls("posts", _entry("/c/"))
        root = ElementTree.fromstring(manager.get_index_xml([SitemapSource(name="posts", sitemap="posts")]))
        assert root.find("sm:sitemap/sm:lastmod", _NS).text == "2022-03-04T00:00:00.000Z"

    def test_bucket_without_dates_has_no_lastmod(self):
        manager = _manager()
        manager.add_urls("pages", _entry("/a/"))
        root = ElementTree.fromstring(manager.get_index_xml([SitemapSource(name="pages", sitemap="pages")]))
        assert root.find("sm:sitemap/sm:lastmod", _NS) is None

    def test_output_is_deterministic(self):
        def render():
            manager = _manager()
            manager.add_urls("posts", _entry("/a/", published_at="2020-01-01"))
            sources = [SitemapSource(name="posts", sitemap="posts")]
            return manager.get_index_xml(sources), manager.get_sitemap_xml("posts")

        assert render() == render()

    def test_index_url(self):
        assert _manager().index_url == "https://example.com/sitemap.xml"
