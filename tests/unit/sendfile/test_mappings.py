import pytest

from accelsend.core.errors import ConfigurationError
from accelsend.sendfile.mappings import (
    AccelMapping,
    AccelMappings,
    parse_mapping_entry,
    parse_mapping_header,
)


pytestmark = pytest.mark.unit


def test_parse_header_keeps_entry_order():
    mappings = parse_mapping_header("/srv/a/=/a/, /srv/=/all/")

    assert list(mappings) == [
        AccelMapping("/srv/a/", "/a/"),
        AccelMapping("/srv/", "/all/"),
    ]


def test_parse_header_splits_on_first_equals_only():
    mappings = parse_mapping_header("/data/=/x?y=z/")

    assert list(mappings) == [AccelMapping("/data/", "/x?y=z/")]


@pytest.mark.parametrize("value", [None, "", ",", "no-separator", "=/x/", "  =  "])
def test_parse_header_never_raises_on_bad_input(value):
    assert parse_mapping_header(value) == AccelMappings()


def test_parse_header_skips_invalid_entries():
    mappings = parse_mapping_header("junk,/tmp/=/t/,=/empty/")

    assert list(mappings) == [AccelMapping("/tmp/", "/t/")]


def test_parse_entry_allows_empty_external_prefix():
    assert parse_mapping_entry("/var/www=") == AccelMapping("/var/www", "")


def test_resolve_replaces_prefix():
    mappings = AccelMappings.from_pairs({"/tmp/": "/foo/bar/"})

    assert mappings.resolve("/tmp/hello.txt") == "/foo/bar/hello.txt"
    assert mappings.resolve("/var/hello.txt") is None


def test_resolve_only_matches_at_start():
    mappings = AccelMappings.from_pairs([("/tmp/", "/t/")])

    assert mappings.resolve("/home/tmp/file") is None


def test_resolve_first_match_in_construction_order():
    mappings = AccelMappings.from_pairs([("/srv/", "/generic/"), ("/srv/media/", "/media/")])

    assert mappings.resolve("/srv/media/a.png") == "/generic/media/a.png"


def test_resolve_is_case_sensitive():
    mappings = AccelMappings.from_pairs({"/Data/": "/d/"})

    assert mappings.resolve("/data/file") is None


def test_from_pairs_rejects_empty_internal_prefix():
    with pytest.raises(ConfigurationError, match="empty internal prefix"):
        AccelMappings.from_pairs([("", "/x/")])


def test_from_pairs_returns_existing_table():
    table = AccelMappings.from_pairs({"/a/": "/b/"})

    assert AccelMappings.from_pairs(table) is table


def test_string_form_round_trips_through_header_parser():
    table = AccelMappings.from_pairs({"/a/": "/b/", "/c/": "/d/"})

    assert str(table) == "/a/=/b/,/c/=/d/"
    assert parse_mapping_header(str(table)) == table


def test_empty_table_is_falsy():
    assert not AccelMappings()
    assert len(AccelMappings.from_pairs({"/a/": "/b/"})) == 1
