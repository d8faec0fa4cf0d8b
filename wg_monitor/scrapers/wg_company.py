import logging
import re
from urllib.parse import urlencode

import requests
from bs4 import BeautifulSoup

from wg_monitor.models import Listing

logger = logging.getLogger(__name__)

BASE_URL = "http://wg-company.de"
FORM_URL = f"{BASE_URL}/cgi-bin/seite?st=1&mi=10&li=100"
SEARCH_URL = f"{BASE_URL}/cgi-bin/zquery.pl"
DETAIL_URL = f"{BASE_URL}/cgi-bin/wg.pl"

# The site is served and queried in Latin-9
SITE_ENCODING = "iso-8859-15"

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:146.0) Gecko/20100101 Firefox/146.0",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
}

_WG_ID_PATTERN = re.compile(r"wg=([^&]+)")


class FetchError(Exception):
    pass


def detail_url_for(listing_id: str) -> str:
    # The id is taken from an href and is already URL-encoded
    return f"{DETAIL_URL}?st=1&function=wgzeigen&wg={listing_id}"


class WGCompanyScraper:
    def __init__(self, timeout: float = 30):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(BROWSER_HEADERS)

    def _get(self, url: str) -> str:
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e
        resp.encoding = SITE_ENCODING
        return resp.text

    def fetch_search_results(self, district: str) -> str:
        """Open the search form (for its cookies), then submit the district search."""
        logger.info(f"Loading search form {FORM_URL}")
        self._get(FORM_URL)

        body = urlencode(
            [
                ("st", "1"),
                ("c", ""),
                ("a", ""),
                ("l", ""),
                ("e", district),
                ("m", ""),
                ("o", ""),
                ("sort", "doe"),
            ],
            encoding=SITE_ENCODING,
        )
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Origin": BASE_URL,
            "Referer": FORM_URL,
            "Upgrade-Insecure-Requests": "1",
        }
        logger.info(f"Searching {SEARCH_URL} district={district}")
        try:
            resp = self.session.post(
                SEARCH_URL, data=body.encode("ascii"), headers=headers, timeout=self.timeout
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Search for {district} failed: {e}") from e
        resp.encoding = SITE_ENCODING
        return resp.text

    def fetch_detail(self, listing_id: str) -> str:
        return self._get(detail_url_for(listing_id))


def parse_listings(html: str) -> list[Listing]:
    soup = BeautifulSoup(html, "html.parser")
    listings = []
    for row in soup.select("table tr"):
        listing = _parse_row(row)
        if listing:
            listings.append(listing)
    return listings


def _parse_row(row) -> Listing | None:
    cells = row.find_all("td", recursive=False)
    # Header and layout rows have fewer cells
    if len(cells) < 7:
        return None

    link_tag = cells[2].select_one("a")
    if not link_tag:
        return None

    href = link_tag.get("href")
    listing_id = None
    detail_url = None
    if href:
        match = _WG_ID_PATTERN.search(href)
        listing_id = match.group(1) if match else None
        detail_url = href if href.startswith("http") else f"{BASE_URL}{href}"

    digits = re.sub(r"\D", "", cells[0].get_text(strip=True))

    return Listing(
        number=int(digits) if digits else 0,
        district=cells[1].get_text(strip=True),
        street=link_tag.get_text(strip=True),
        listing_id=listing_id,
        detail_url=detail_url,
        listing_type=cells[3].get_text(strip=True),
        price=cells[4].get_text(strip=True),
        size=cells[5].get_text(strip=True),
        available=cells[6].get_text(strip=True),
    )
