# src/config/settings.py

"""Central configuration for the price_aggregator service."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_aggregator service."""

    # --- Environment ---
    APP_ENV: str = os.getenv("APP_ENV", "development")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # --- Query interpretation (Gemini) ---
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    GEMINI_API_BASE: str = (
        "https://generativelanguage.googleapis.com/v1beta"
    )
    LLM_TIMEOUT: float = 15.0           # Single attempt, no retry

    # --- Retrieval ---
    RENDER_TIMEOUT_MS: int = 15000      # Browser navigation timeout
    RENDER_SETTLE_SECONDS: float = 2.0  # Wait for deferred content
    HTTP_TIMEOUT: int = 10              # Lightweight fetch timeout
    SOURCE_TIMEOUT: float = 45.0        # Whole retrieve+extract per source

    # --- Ranking ---
    MAX_RESULTS: int = 10

    # --- Browser Impersonation ---
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/131.0.0.0 Safari/537.36"
    )
    VIEWPORT: dict[str, int] = {"width": 1366, "height": 768}
    # Containers running Chromium as root must set CHROMIUM_SANDBOX=false
    CHROMIUM_SANDBOX: bool = (
        os.getenv("CHROMIUM_SANDBOX", "true").lower() == "true"
    )
    BROWSER_ARGS: list[str] = [
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--no-first-run",
        "--disable-gpu",
        "--disable-blink-features=AutomationControlled",
    ]
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/webp,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }
    CAPTCHA_KEYWORDS: list[str] = [
        "captcha",
        "verify you are human",
        "unusual traffic",
        "automated requests",
    ]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    LOGS_DIR: Path = BASE_DIR / "logs"

    @classmethod
    def is_production(cls) -> bool:
        """Return True when running with APP_ENV=production."""
        return cls.APP_ENV.lower() == "production"
