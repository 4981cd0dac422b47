"""Unit tests for the URL classifier."""

import pytest

from sitegraph.core.classifier import (
    ROOT_SECTION,
    classify,
    find_category,
    find_year_month,
    host_of,
    path_segments,
)


class TestClassify:
    def test_dated_blog_post(self):
        info = classify("https://ex.com/blog/2024/01/liquid-drop/")

        assert info.segments == ["blog", "2024", "01", "liquid-drop"]
        assert info.section == "blog"
        assert info.year_month == "2024/01"
        assert info.category is None
        assert info.title == "liquid drop"
        assert info.host == "ex.com"
        assert not info.degraded

    def test_home_page(self):
        info = classify("https://ex.com/")
        assert info.segments == []
        assert info.section == ROOT_SECTION
        assert info.title == "Home"
        assert info.relative_segments == []

    def test_category_is_lower_cased(self):
        info = classify("https://ex.com/blog/category/Events/")
        assert info.category == "events"
        assert info.title == "Events"

    def test_title_is_percent_decoded(self):
        info = classify("https://ex.com/menu/caf%C3%A9-au-lait")
        assert info.title == "café au lait"

    def test_year_month_at_path_start(self):
        assert classify("https://ex.com/2023/05/hello").year_month == "2023/05"

    def test_relative_segments_drop_section(self):
        info = classify("https://ex.com/blog/2024/01/x")
        assert info.relative_segments == ["2024", "01", "x"]

    def test_relative_segments_with_root_named_section(self):
        info = classify("https://ex.com/(root)/x")
        assert info.section == ROOT_SECTION
        assert info.relative_segments == ["x"]

    def test_home_page_has_no_relative_segments(self):
        assert classify("https://ex.com/").relative_segments == []

    def test_host_drops_userinfo_and_default_port(self):
        assert classify("https://user:pw@Ex.com:443/a").host == "ex.com"
        assert classify("http://ex.com:80/a").host == "ex.com"
        assert classify("http://ex.com:8080/a").host == "ex.com:8080"

    @pytest.mark.parametrize("raw", ["not a url", "http://[broken/path", "https://ex.com:port/x", ""])
    def test_malformed_url_degrades(self, raw):
        info = classify(raw)
        assert info.degraded
        assert info.segments == []
        assert info.section == ROOT_SECTION
        assert info.title == raw


class TestHelpers:
    def test_path_segments_drop_empty(self):
        assert path_segments("//a///b/") == ["a", "b"]

    def test_find_category_needs_following_segment(self):
        assert find_category(["blog", "category"]) is None
        assert find_category(["category", "Mixes", "x"]) == "mixes"

    def test_find_year_month_rejects_short_tokens(self):
        assert find_year_month(["blog", "24", "01"]) is None
        assert find_year_month(["blog", "2024", "1"]) is None

    def test_host_of(self):
        assert host_of("https://CDN.ex.com/a.jpg") == "cdn.ex.com"
        assert host_of("/relative/a.jpg") is None
        assert host_of("http://[broken") is None

    def test_host_of_normalizes_port(self):
        assert host_of("https://ex.com:443/a.jpg") == "ex.com"
        assert host_of("https://cdn.ex.com:8443/a.jpg") == "cdn.ex.com:8443"
        assert host_of("https://me@cdn.ex.com/a.jpg") == "cdn.ex.com"
        assert host_of("https://[::1]:8443/a.jpg") == "[::1]:8443"
