import logging
import time
from collections.abc import Callable, Iterable

from wg_monitor.models import Listing, MatchResult
from wg_monitor.scrapers.wg_company import FetchError

logger = logging.getLogger(__name__)


def contains_keyword(text: str, keyword: str) -> bool:
    return keyword.casefold() in text.casefold()


def check_keyword(
    listings: Iterable[Listing],
    fetch_detail: Callable[[str], str],
    keyword: str,
    delay: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> list[MatchResult]:
    """Fetch each listing's detail page and look for keyword in it.

    A failed fetch counts as no match and is not retried. The pause after
    every fetch keeps the request rate against the site low.
    """
    results = []
    for listing in listings:
        if listing.listing_id is None:
            logger.warning(f"  {listing.street}: no listing id, cannot fetch detail page")
            results.append(MatchResult(listing=listing, keyword_confirmed=False, fetch_failed=True))
            continue

        try:
            detail_html = fetch_detail(listing.listing_id)
        except FetchError as e:
            logger.warning(f"  {listing.street}: failed to fetch detail page: {e}")
            results.append(MatchResult(listing=listing, keyword_confirmed=False, fetch_failed=True))
            sleep(delay)
            continue

        confirmed = contains_keyword(detail_html, keyword)
        if confirmed:
            logger.info(f"  {listing.street}: contains '{keyword}'")
        else:
            logger.info(f"  {listing.street}: no '{keyword}'")
        results.append(MatchResult(listing=listing, keyword_confirmed=confirmed))
        sleep(delay)

    return results
