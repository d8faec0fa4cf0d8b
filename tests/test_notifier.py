import logging
import webbrowser
from unittest.mock import MagicMock, patch

from wg_monitor.models import Listing, MatchResult
from wg_monitor.notifier import BrowserNotifier, log_matches


@patch("wg_monitor.notifier.time.sleep")
@patch("wg_monitor.notifier.webbrowser.get")
def test_open_urls_uses_named_browser(mock_get, mock_sleep):
    controller = MagicMock()
    controller.open_new_tab.return_value = True
    mock_get.return_value = controller

    opened = BrowserNotifier(browser="firefox", tab_delay=1.0).open_urls(["http://a", "http://b"])

    assert opened == 2
    mock_get.assert_called_once_with("firefox")
    assert [c.args[0] for c in controller.open_new_tab.call_args_list] == ["http://a", "http://b"]
    # Pause between tabs only
    mock_sleep.assert_called_once_with(1.0)


@patch("wg_monitor.notifier.time.sleep")
@patch("wg_monitor.notifier.webbrowser.get")
def test_open_urls_falls_back_to_default_browser(mock_get, mock_sleep):
    controller = MagicMock()
    controller.open_new_tab.return_value = True
    mock_get.side_effect = [webbrowser.Error("no firefox"), controller]

    opened = BrowserNotifier(browser="firefox").open_urls(["http://a"])

    assert opened == 1
    assert mock_get.call_count == 2
    mock_sleep.assert_not_called()


@patch("wg_monitor.notifier.webbrowser.get")
def test_open_urls_without_any_browser(mock_get):
    mock_get.side_effect = webbrowser.Error("nothing")

    assert BrowserNotifier().open_urls(["http://a"]) == 0


@patch("wg_monitor.notifier.webbrowser.get")
def test_open_urls_counts_refused_tabs(mock_get):
    controller = MagicMock()
    controller.open_new_tab.side_effect = [True, False]
    mock_get.return_value = controller

    assert BrowserNotifier(tab_delay=0).open_urls(["http://a", "http://b"]) == 1


@patch("wg_monitor.notifier.webbrowser.get")
def test_open_urls_empty(mock_get):
    assert BrowserNotifier().open_urls([]) == 0
    mock_get.assert_not_called()


def test_log_matches(caplog):
    listing = Listing(
        number=1,
        district="Neukölln",
        street="Oderstraße 12",
        listing_id="1001",
        detail_url="http://wg-company.de/cgi-bin/wg.pl?st=1&function=wgzeigen&wg=1001",
        listing_type="2er WG",
        price="450 €",
        size="14 m²",
        available="ab sofort",
    )
    with caplog.at_level(logging.INFO, logger="wg_monitor.notifier"):
        log_matches([MatchResult(listing=listing, keyword_confirmed=True)])

    assert "Oderstraße 12 - 450 € - 14 m² - 2er WG" in caplog.text
    assert "wg=1001" in caplog.text
