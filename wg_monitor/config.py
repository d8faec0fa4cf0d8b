import os

DEFAULT_TARGET_STREETS = (
    "Oder,Warthe,Netze,Emser,Siegfried,Leine,Oker,Lichtenrader,"
    "Schillerpromenade,Weise,Aller,Kienitzer,Herrfurth,Selchower,"
    "Mahlower,Fontane,Karlsgarten,Mariendorfer"
)


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


SEARCH_CONFIG = {
    # Partial, case-insensitive street names
    "target_streets": _split_list(os.environ.get("TARGET_STREETS", DEFAULT_TARGET_STREETS)),
    # Other districts on the site: Charlottenburg, Friedrichshain, Kreuzberg,
    # Lichtenberg, Mitte, Pankow, Prenzlauer Berg, Schöneberg, Wedding, ...
    "districts": _split_list(os.environ.get("SEARCH_DISTRICTS", "Neukölln")),
    "required_keyword": os.environ.get("REQUIRED_KEYWORD", "dauerhaft"),
    "cache_file": os.environ.get("WG_CACHE_FILE", ".wg_monitor_cache.json"),
    "detail_delay": float(os.environ.get("DETAIL_DELAY", "0.5")),
    "request_timeout": float(os.environ.get("REQUEST_TIMEOUT", "30")),
    "browser": os.environ.get("BROWSER_NAME", "firefox"),
    "tab_delay": float(os.environ.get("TAB_DELAY", "1")),
    "recheck_failed_details": _flag(os.environ.get("RECHECK_FAILED_DETAILS", "false")),
}
