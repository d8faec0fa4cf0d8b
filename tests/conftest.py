import os

os.environ.setdefault("TARGET_STREETS", "Oder,Weise,Emser")
os.environ.setdefault("SEARCH_DISTRICTS", "Neukölln")
os.environ.setdefault("REQUIRED_KEYWORD", "dauerhaft")
os.environ.setdefault("WG_CACHE_FILE", ".wg_monitor_cache.test.json")
os.environ.setdefault("DETAIL_DELAY", "0")
os.environ.setdefault("TAB_DELAY", "0")
