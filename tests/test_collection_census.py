import io

import pytest

from mongoadmin.core.errors import StoreConnectionError
from mongoadmin.ops.collection_census import (
    HEADER,
    CensusFailure,
    CensusRow,
    collect_census,
    format_failure,
    format_row,
    list_user_databases,
    write_report,
)
from fakes import FakeClient, FakeCollection, FakeDatabase


def render(client):
    out, err = io.StringIO(), io.StringIO()
    counts = write_report(collect_census(client), out=out, err=err)
    return out.getvalue().splitlines(), err.getvalue().splitlines(), counts


def test_report_for_shop_database(shop_client):
    lines, errors, counts = render(shop_client)

    assert lines == [HEADER, "shop|orders|10|2", "shop|users|3|1"]
    assert errors == []
    assert counts == (2, 0)


def test_reserved_databases_are_never_touched(shop_client):
    render(shop_client)
    assert shop_client.requested == ["shop"]
    assert list_user_databases(FakeClient([FakeDatabase("config"), FakeDatabase("app")])) == ["app"]


def test_collections_sorted_within_database():
    client = FakeClient([
        FakeDatabase("b", {"zeta": FakeCollection(), "Alpha": FakeCollection(), "beta": FakeCollection()}),
        FakeDatabase("a", {"only": FakeCollection(1, 1)}),
    ])

    lines, _, _ = render(client)

    # database order follows the server listing; collections are sorted
    assert lines[1:] == ["b|Alpha|0|1", "b|beta|0|1", "b|zeta|0|1", "a|only|1|1"]


def test_count_failure_is_reported_separately_and_enumeration_continues():
    client = FakeClient([
        FakeDatabase("app", {"bad": FakeCollection(fail=True), "good": FakeCollection(4, 2)}),
        FakeDatabase("other", {"more": FakeCollection(1, 1)}),
    ])

    lines, errors, counts = render(client)

    assert lines == [HEADER, "app|good|4|2", "other|more|1|1"]
    assert errors == ["ERROR|app|bad|count failed"]
    assert counts == (2, 1)


def test_listing_failure_skips_only_that_database():
    client = FakeClient([
        FakeDatabase("locked", fail_listing=True),
        FakeDatabase("open", {"c": FakeCollection(5, 3)}),
    ])

    entries = list(collect_census(client))

    assert entries[0] == CensusFailure(database="locked", collection=None, error="not authorized")
    assert entries[1] == CensusRow(database="open", collection="c", document_count=5, index_count=3)


def test_database_listing_failure_is_fatal():
    with pytest.raises(StoreConnectionError):
        collect_census(FakeClient([], fail_listing=True))


def test_empty_server_prints_only_header():
    lines, errors, counts = render(FakeClient([FakeDatabase("admin")]))
    assert lines == [HEADER]
    assert counts == (0, 0)


def test_format_row_and_failure():
    assert format_row(CensusRow(database="d", collection="c", document_count=7, index_count=1)) == "d|c|7|1"
    assert format_failure(CensusFailure(database="d", error="boom")) == "ERROR|d|*|boom"
    assert format_failure(CensusFailure(database="d", collection="c", error="boom")) == "ERROR|d|c|boom"


def test_index_listing_failure_is_reported_and_enumeration_continues():
    client = FakeClient([
        FakeDatabase("app", {"a": FakeCollection(2, 1), "b": FakeCollection(3, fail_indexes=True), "c": FakeCollection(4, 2)}),
        FakeDatabase("other", {"more": FakeCollection(1, 1)}),
    ])

    lines, errors, counts = render(client)

    assert lines == [HEADER, "app|a|2|1", "app|c|4|2", "other|more|1|1"]
    assert errors == ["ERROR|app|b|listIndexes failed"]
    assert counts == (3, 1)
