# threadfinder/config/settings.py

"""Central configuration for the threadfinder aggregator."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the threadfinder aggregator."""

    # --- Scraping ---
    REQUEST_TIMEOUT: int = int(
        os.getenv("THREADFINDER_REQUEST_TIMEOUT", "15")
    )                                   # Seconds before a request times out
    MAX_RESULTS: int = int(
        os.getenv("THREADFINDER_MAX_RESULTS", "12")
    )                                   # Products kept per store
    MAX_REDIRECTS: int = 5

    # --- Normalisation ---
    MAX_TITLE_LENGTH: int = 120
    MIN_PRICE: float = 0.0              # Exclusive lower bound
    MAX_PRICE: float = 50_000.0         # Exclusive upper bound
    MAX_QUERY_LENGTH: int = 200

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    USER_AGENTS: list[str] = [
        (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
        (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/131.0.0.0 Safari/537.36"
        ),
    ]
    JSON_ACCEPT: str = "application/json, text/plain, */*"
    HTML_ACCEPT: str = (
        "text/html,application/xhtml+xml,"
        "application/xml;q=0.9,*/*;q=0.8"
    )
    ACCEPT_LANGUAGE: str = "en-US,en;q=0.5"

    # --- API server ---
    HOST: str = os.getenv("THREADFINDER_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("THREADFINDER_PORT", "8000"))
    CORS_ORIGINS: list[str] = ["*"]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = Path(
        os.getenv("THREADFINDER_LOGS_DIR", str(BASE_DIR / "logs"))
    )

    # --- Stores ---
    # Tier 1 entries share the storefront search-suggest adapter and
    # differ only by domain; tier 2 entries each have a bespoke adapter.
    _SUGGEST = "threadfinder.scrapers.suggest_scraper.SuggestScraper"

    STORES: list[dict[str, str]] = [
        {
            "id": "whitefox",
            "name": "White Fox",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.whitefoxboutique.com",
            "color": "#000000",
            "logo": "🦊",
            "category": "boutique",
        },
        {
            "id": "princesspolly",
            "name": "Princess Polly",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "us.princesspolly.com",
            "color": "#FF69B4",
            "logo": "👑",
            "category": "boutique",
        },
        {
            "id": "reformation",
            "name": "Reformation",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.thereformation.com",
            "color": "#2D5016",
            "logo": "🌿",
            "category": "boutique",
        },
        {
            "id": "showpo",
            "name": "Showpo",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.showpo.com",
            "color": "#FF69B4",
            "logo": "🦩",
            "category": "boutique",
        },
        {
            "id": "vici",
            "name": "Vici",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.vicicollection.com",
            "color": "#C9A86C",
            "logo": "✨",
            "category": "boutique",
        },
        {
            "id": "altardstate",
            "name": "Altar'd State",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.altardstate.com",
            "color": "#D4A574",
            "logo": "🕊️",
            "category": "premium",
        },
        {
            "id": "francescas",
            "name": "Francesca's",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.francescas.com",
            "color": "#E8C4A2",
            "logo": "🌼",
            "category": "boutique",
        },
        {
            "id": "windsor",
            "name": "Windsor",
            "tier": "1",
            "adapter": _SUGGEST,
            "domain": "www.windsorstore.com",
            "color": "#8B0000",
            "logo": "👠",
            "category": "premium",
        },
        {
            "id": "asos",
            "name": "ASOS",
            "tier": "2",
            "adapter": "threadfinder.scrapers.asos_scraper.AsosScraper",
            "domain": "www.asos.com",
            "color": "#2D2D2D",
            "logo": "🛍️",
            "category": "uk-fashion",
        },
        {
            "id": "hm",
            "name": "H&M",
            "tier": "2",
            "adapter": "threadfinder.scrapers.hm_scraper.HmScraper",
            "domain": "www2.hm.com",
            "color": "#E50010",
            "logo": "🔴",
            "category": "fast-fashion",
        },
        {
            "id": "lulus",
            "name": "Lulus",
            "tier": "2",
            "adapter": "threadfinder.scrapers.lulus_scraper.LulusScraper",
            "domain": "www.lulus.com",
            "color": "#F8B4B4",
            "logo": "🌹",
            "category": "premium",
        },
        {
            "id": "nordstrom",
            "name": "Nordstrom",
            "tier": "2",
            "adapter": (
                "threadfinder.scrapers.nordstrom_scraper.NordstromScraper"
            ),
            "domain": "www.nordstrom.com",
            "color": "#000000",
            "logo": "🏬",
            "category": "premium",
        },
        {
            "id": "shein",
            "name": "SHEIN",
            "tier": "2",
            "adapter": "threadfinder.scrapers.shein_scraper.SheinScraper",
            "domain": "us.shein.com",
            "color": "#000000",
            "logo": "🛒",
            "category": "fast-fashion",
        },
    ]

    STORE_CATEGORIES: dict[str, dict[str, str]] = {
        "boutique": {"name": "Trendy Boutiques", "icon": "✨"},
        "fast-fashion": {"name": "Fast Fashion", "icon": "⚡"},
        "uk-fashion": {"name": "UK Fashion", "icon": "🇬🇧"},
        "casual": {"name": "Casual & Lifestyle", "icon": "🌿"},
        "premium": {"name": "Premium & Department", "icon": "💎"},
    }

    CLOTHING_CATEGORIES: list[dict[str, str]] = [
        {"id": "all", "name": "All Items", "icon": "👗"},
        {"id": "dresses", "name": "Dresses", "icon": "👗"},
        {"id": "tops", "name": "Tops", "icon": "👚"},
        {"id": "bottoms", "name": "Bottoms", "icon": "👖"},
        {"id": "jeans", "name": "Jeans", "icon": "👖"},
        {"id": "skirts", "name": "Skirts", "icon": "🩱"},
        {"id": "shorts", "name": "Shorts", "icon": "🩳"},
        {"id": "swimwear", "name": "Swimwear", "icon": "👙"},
        {"id": "activewear", "name": "Activewear", "icon": "🏃‍♀️"},
        {"id": "outerwear", "name": "Outerwear", "icon": "🧥"},
        {"id": "loungewear", "name": "Loungewear", "icon": "🛋️"},
        {"id": "accessories", "name": "Accessories", "icon": "👜"},
    ]
