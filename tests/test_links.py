from sitesearch.links import filter_links, normalize_link

PAGE = "https://www.example-site.tld/works/volume_1/index.htm"
OPTS = dict(domain="example-site.tld", extensions=(".htm", ".html"))


def test_relative_link_is_resolved_against_page():
    assert normalize_link("lecture.htm", PAGE, **OPTS) == (
        "https://www.example-site.tld/works/volume_1/lecture.htm"
    )
    assert normalize_link("../volume_2/notes.html", PAGE, **OPTS) == (
        "https://www.example-site.tld/works/volume_2/notes.html"
    )


def test_fragment_is_dropped_query_is_kept():
    assert normalize_link("lecture.htm#p3", PAGE, **OPTS) == (
        "https://www.example-site.tld/works/volume_1/lecture.htm"
    )
    assert normalize_link("lecture.htm?v=2", PAGE, **OPTS) == (
        "https://www.example-site.tld/works/volume_1/lecture.htm?v=2"
    )


def test_subdomains_accepted_lookalikes_rejected():
    assert normalize_link("http://example-site.tld/a.htm", PAGE, **OPTS)
    assert normalize_link("https://cdn.example-site.tld/a.htm", PAGE, **OPTS)
    assert normalize_link("https://notexample-site.tld/a.htm", PAGE, **OPTS) is None
    assert normalize_link("https://example-site.tld.evil/a.htm", PAGE, **OPTS) is None


def test_only_documents_are_accepted():
    assert normalize_link("pic.jpg", PAGE, **OPTS) is None
    assert normalize_link("folder/", PAGE, **OPTS) is None
    assert normalize_link("LECTURE.HTM", PAGE, **OPTS)


def test_non_http_and_malformed_links_are_dropped():
    assert normalize_link("mailto:someone@example-site.tld", PAGE, **OPTS) is None
    assert normalize_link("ftp://example-site.tld/a.htm", PAGE, **OPTS) is None
    assert normalize_link("http://[::1/a.htm", PAGE, **OPTS) is None


def test_excluded_paths():
    assert (
        normalize_link(
            "/bengali/index.htm", PAGE, excluded_paths=("/bengali/",), **OPTS
        )
        is None
    )


def test_accepted_urls_are_absolute_on_domain_documents():
    hrefs = [
        "a.htm", "b.html#x", "c.pdf", "//example-site.tld/d.htm",
        "http://other.tld/e.htm", "javascript:void(0)", "http://[bad",
    ]
    for url in filter_links(hrefs, PAGE, **OPTS):
        assert url.startswith(("http://", "https://"))
        assert url.split("/")[2].endswith("example-site.tld")
        assert url.endswith((".htm", ".html"))


def test_filter_links_dedupes_in_first_seen_order():
    links = filter_links(["b.htm", "a.htm", "b.htm#top", "a.htm"], PAGE, **OPTS)
    assert links == [
        "https://www.example-site.tld/works/volume_1/b.htm",
        "https://www.example-site.tld/works/volume_1/a.htm",
    ]
