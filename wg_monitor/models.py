from dataclasses import dataclass


@dataclass
class Listing:
    number: int
    district: str
    street: str
    listing_id: str | None
    detail_url: str | None
    listing_type: str = ""
    price: str = ""
    size: str = ""
    available: str = ""

    @property
    def unique_key(self) -> str | None:
        return self.listing_id


@dataclass
class MatchResult:
    listing: Listing
    keyword_confirmed: bool
    fetch_failed: bool = False

    @property
    def detail_url(self) -> str | None:
        return self.listing.detail_url
