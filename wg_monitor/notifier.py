import logging
import time
import webbrowser
from collections.abc import Sequence

from wg_monitor.models import MatchResult

logger = logging.getLogger(__name__)


def log_matches(matches: Sequence[MatchResult]) -> None:
    for match in matches:
        listing = match.listing
        logger.info(
            f"NEW: {listing.street} - {listing.price} - {listing.size} - {listing.listing_type}"
        )
        logger.info(f"     Available: {listing.available}")
        logger.info(f"     Link: {listing.detail_url}")


class BrowserNotifier:
    """Opens listing pages as browser tabs."""

    def __init__(self, browser: str = "firefox", tab_delay: float = 1.0):
        self.browser = browser
        self.tab_delay = tab_delay

    def _controller(self):
        try:
            return webbrowser.get(self.browser)
        except webbrowser.Error:
            logger.warning(f"Browser '{self.browser}' not available, using system default")
            return webbrowser.get()

    def open_urls(self, urls: Sequence[str]) -> int:
        if not urls:
            return 0

        logger.info(f"Opening {len(urls)} listing(s) in {self.browser}")
        try:
            controller = self._controller()
        except webbrowser.Error as e:
            logger.error(f"No browser available, open manually: {e}")
            for url in urls:
                logger.info(f"   {url}")
            return 0

        opened = 0
        for i, url in enumerate(urls):
            if i and self.tab_delay:
                time.sleep(self.tab_delay)
            logger.info(f"   Opening: {url}")
            if controller.open_new_tab(url):
                opened += 1
            else:
                logger.warning(f"   Browser refused {url}")
        return opened
