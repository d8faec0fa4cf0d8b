from collections.abc import Iterable, Sequence

from wg_monitor.models import Listing


def street_matches(street: str, targets: Iterable[str]) -> bool:
    """True if any target occurs anywhere in street, ignoring case.

    Plain substring matching: "Oder" also hits "Oderberger Straße".
    """
    street_normalized = street.casefold()
    return any(target.casefold() in street_normalized for target in targets)


def filter_by_streets(listings: Iterable[Listing], targets: Sequence[str]) -> list[Listing]:
    return [listing for listing in listings if street_matches(listing.street, targets)]
