"""Tests for sitemapgen.services.resolver."""

from sitemapgen.models.records import BuiltPage, ContentRecord
from sitemapgen.services.resolver import join_path, resolve_path


def _pages(*paths: str) -> list:
    return [BuiltPage(id=str(i), path=p) for i, p in enumerate(paths)]


class TestJoinPath:
    def test_empty_prefix(self):
        assert join_path("", "/about/") == "/about/"

    def test_prefix_is_kept_for_absolute_slug(self):
        assert join_path("/blog", "/about/") == "/blog/about/"

    def test_duplicate_separators_collapse(self):
        assert join_path("/blog/", "/about/") == "/blog/about/"

    def test_relative_slug(self):
        assert join_path("", "about/") == "about/"


class TestResolvePath:
    def test_suffix_match_uses_built_page_path(self):
        record = ContentRecord(slug="/my-post/")
        resolved = resolve_path(record, _pages("/", "/blog/my-post/"))
        assert resolved.path == "/blog/my-post/"

    def test_substring_without_suffix_does_not_match(self):
        record = ContentRecord(slug="/about/")
        resolved = resolve_path(record, _pages("/about-us/"))
        assert resolved.path == "/about/"

    def test_first_matching_page_wins(self):
        record = ContentRecord(slug="/my-post/")
        resolved = resolve_path(record, _pages("/en/my-post/", "/de/my-post/"))
        assert resolved.path == "/en/my-post/"

    def test_fallback_uses_path_prefix(self):
        record = ContentRecord(slug="/about/")
        resolved = resolve_path(record, _pages("/contact/"), path_prefix="/site")
        assert resolved.path == "/site/about/"

    def test_match_ignores_trailing_separator(self):
        record = ContentRecord(slug="/my-post")
        resolved = resolve_path(record, _pages("/blog/my-post/"))
        assert resolved.path == "/blog/my-post/"

    def test_match_is_case_insensitive(self):
        record = ContentRecord(slug="/My-Post/")
        resolved = resolve_path(record, _pages("/blog/my-post/"))
        assert resolved.path == "/blog/my-post/"

    def test_regex_characters_in_slug_are_literal(self):
        record = ContentRecord(slug="/a.b/")
        assert resolve_path(record, _pages("/axb/")).path == "/a.b/"
        assert resolve_path(record, _pages("/x/a.b/")).path == "/x/a.b/"

    def test_root_slug_only_matches_root_page(self):
        record = ContentRecord(slug="/")
        assert resolve_path(record, _pages("/404/", "/")).path == "/"
        assert resolve_path(record, _pages("/about/")).path == "/"

    def test_original_record_is_unchanged(self):
        record = ContentRecord(slug="/my-post/")
        resolve_path(record, _pages("/blog/my-post/"))
        assert record.path is None

    def test_metadata_is_carried_over(self):
        record = ContentRecord(slug="/my-post/", metadata={"id": "1"})
        assert resolve_path(record, []).metadata == {"id": "1"}
