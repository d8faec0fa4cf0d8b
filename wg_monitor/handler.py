import logging
import sys

from wg_monitor import cache as dedup
from wg_monitor.cache import CacheError, DedupCache
from wg_monitor.config import SEARCH_CONFIG
from wg_monitor.models import MatchResult
from wg_monitor.notifier import BrowserNotifier, log_matches
from wg_monitor.scrapers.wg_company import FetchError, WGCompanyScraper, parse_listings
from wg_monitor.streets import filter_by_streets
from wg_monitor.verifier import check_keyword

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)


def process_district(
    district: str, seen: DedupCache, scraper, config: dict, stats: dict
) -> tuple[DedupCache, list[MatchResult]]:
    """Run one district through fetch, street filter, dedup and keyword check.

    Returns the (possibly updated and already persisted) cache and the
    keyword-confirmed matches. Raises FetchError if the search itself fails.
    """
    html = scraper.fetch_search_results(district)
    listings = parse_listings(html)
    logger.info(f"   Parsed {len(listings)} listings")

    street_matches = filter_by_streets(listings, config["target_streets"])
    stats["street_matches"] += len(street_matches)
    logger.info(f"   Found {len(street_matches)} listings on target streets")

    # Only new listings get their detail page fetched
    new_street_matches = dedup.filter_new(seen, street_matches)
    stats["new"] += len(new_street_matches)
    logger.info(f"   Found {len(new_street_matches)} NEW listings on target streets")

    if not new_street_matches:
        logger.info(f"   No new listings in {district}")
        return seen, []

    keyword = config["required_keyword"]
    logger.info(f"   Checking detail pages for '{keyword}'...")
    results = check_keyword(
        new_street_matches,
        scraper.fetch_detail,
        keyword,
        delay=config["detail_delay"],
    )
    confirmed = [r for r in results if r.keyword_confirmed]
    logger.info(f"   Found {len(confirmed)} listings with '{keyword}'")

    # Every new street match is recorded, keyword or not, so it is never
    # checked again.
    to_record = new_street_matches
    if config.get("recheck_failed_details"):
        to_record = [r.listing for r in results if not r.fetch_failed]
    seen = dedup.record_seen(seen, to_record)
    dedup.persist(seen, config["cache_file"])

    return seen, confirmed


def run(config: dict | None = None, notifier=None) -> dict:
    config = config or SEARCH_CONFIG
    keyword = config["required_keyword"]
    logger.info("WG monitor run starting")

    # CorruptCacheError propagates before any district is touched
    seen = dedup.load(config["cache_file"])

    scraper = WGCompanyScraper(timeout=config["request_timeout"])
    stats = {"street_matches": 0, "new": 0}
    failed_districts: list[str] = []
    all_matches: list[MatchResult] = []

    for district in config["districts"]:
        logger.info(f"Searching for WGs in {district}...")
        try:
            seen, matches = process_district(district, seen, scraper, config, stats)
        except FetchError as e:
            logger.error(f"Skipping {district}: {e}")
            failed_districts.append(district)
            continue
        all_matches.extend(matches)

    opened = 0
    if all_matches:
        logger.info(
            f"Found {len(all_matches)} NEW listing(s) with '{keyword}' across all districts"
        )
        log_matches(all_matches)
        if notifier is None:
            notifier = BrowserNotifier(browser=config["browser"], tab_delay=config["tab_delay"])
        opened = notifier.open_urls([m.detail_url for m in all_matches if m.detail_url])
    else:
        logger.info(f"No new listings with '{keyword}' found in any district")

    return {
        "districts": len(config["districts"]),
        "failed_districts": failed_districts,
        "street_matches": stats["street_matches"],
        "new": stats["new"],
        "confirmed": len(all_matches),
        "opened": opened,
    }


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> int:
    setup_logging()
    try:
        run()
    except CacheError as e:
        logger.error(f"Aborting: {e}")
        return 1
    return 0
