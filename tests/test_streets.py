from wg_monitor.models import Listing
from wg_monitor.streets import filter_by_streets, street_matches


def _make_listing(street: str, listing_id: str | None = "1") -> Listing:
    return Listing(number=1, district="Neukölln", street=street, listing_id=listing_id, detail_url=None)


def test_filter_keeps_only_target_streets():
    oder = _make_listing("Oderstraße 5")
    haupt = _make_listing("Hauptstraße 1")

    assert filter_by_streets([oder, haupt], ["Oder"]) == [oder]


def test_filter_is_case_insensitive():
    assert street_matches("WEISESTR. 40", ["weise"])
    assert street_matches("weisestraße 40", ["WEISE"])


def test_filter_matches_substring_anywhere():
    # Substring matching is deliberately loose
    assert street_matches("Alte Oderberger Str. 2", ["Oder"])
    assert street_matches("Am Karlsgarten 3", ["Karlsgarten"])


def test_filter_any_of_several_targets():
    listings = [_make_listing("Leinestraße 1"), _make_listing("Sonnenallee 9"), _make_listing("Okerstr. 2")]
    result = filter_by_streets(listings, ["Oker", "Leine"])
    assert [l.street for l in result] == ["Leinestraße 1", "Okerstr. 2"]


def test_filter_preserves_order_and_duplicates():
    first = _make_listing("Oderstraße 5", "a")
    second = _make_listing("Oderstraße 5", "b")
    assert filter_by_streets([first, second], ["oder"]) == [first, second]


def test_filter_empty_inputs():
    assert filter_by_streets([], ["Oder"]) == []
    assert filter_by_streets([_make_listing("Oderstraße 5")], []) == []
