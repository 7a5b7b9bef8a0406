# src/scrapers/retriever.py

"""Two-tier page retrieval: headless browser first, plain HTTP second."""

import asyncio
import logging
import re

from curl_cffi import requests as curl_requests
from playwright.async_api import async_playwright

from src.config.settings import Settings
from src.models.source import SourceDefinition

# Makes navigator.webdriver read as undefined to page scripts
_HIDE_WEBDRIVER_JS = """
Object.defineProperty(navigator, 'webdriver', {
  get: () => undefined,
});
"""

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.DOTALL)

# Interstitial titles; listing text elsewhere on the page may contain them
_CF_CHALLENGE_TITLES: tuple[str, ...] = (
    "just a moment",
    "attention required",
)

# Challenge script markers; normal Cloudflare-fronted pages can load
# these too, so they only count on short pages
_CF_CHALLENGE_MARKERS: tuple[str, ...] = (
    "challenges.cloudflare.com",
    "cdn-cgi/challenge-platform",
    "cf-turnstile",
    "cf_chl_opt",
)

# Below this size, or without a <body>, a page is treated as an interstitial
_MIN_RESULT_PAGE_CHARS = 5000


class RetrievalError(Exception):
    """Raised when every retrieval tier failed for a source."""


class PageRetriever:
    """Fetch a source's search-results markup.

    Tier 1 renders the page in an isolated headless Chromium so that
    script-populated listings are present.  Tier 2 is a single
    browser-impersonating HTTP GET.  Each tier has its own timeout and a
    failure in one never affects another source.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("price_aggregator.retriever")
        self.settings = Settings()

    def is_usable(self, html: str | None, source_name: str) -> bool:
        """Reject empty markup and bot-challenge interstitials."""
        if not html or not html.strip():
            self.logger.info("[%s] Empty markup", source_name)
            return False
        lower = html.lower()

        title_match = _TITLE_RE.search(lower)
        title = title_match.group(1).strip() if title_match else ""
        for marker in _CF_CHALLENGE_TITLES:
            if marker in title:
                self.logger.warning(
                    "[%s] Cloudflare challenge title '%s'",
                    source_name,
                    title,
                )
                return False

        has_body_content = (
            "<body" in lower and len(html) > _MIN_RESULT_PAGE_CHARS
        )
        if has_body_content:
            return True

        for marker in _CF_CHALLENGE_MARKERS:
            if marker in lower:
                self.logger.warning(
                    "[%s] Cloudflare challenge detected (marker: '%s')",
                    source_name,
                    marker,
                )
                return False
        for keyword in self.settings.CAPTCHA_KEYWORDS:
            if keyword in lower:
                self.logger.warning(
                    "[%s] CAPTCHA keyword '%s' detected",
                    source_name,
                    keyword,
                )
                return False
        return True

    async def fetch_rendered(self, url: str) -> str:
        """Render *url* in headless Chromium and return the final DOM.

        The browser is always closed before returning, including on
        navigation timeout.
        """
        async with async_playwright() as pw:
            browser = await pw.chromium.launch(
                headless=True,
                chromium_sandbox=self.settings.CHROMIUM_SANDBOX,
                args=self.settings.BROWSER_ARGS,
            )
            try:
                context = await browser.new_context(
                    viewport=self.settings.VIEWPORT,
                    user_agent=self.settings.USER_AGENT,
                )
                await context.add_init_script(_HIDE_WEBDRIVER_JS)
                page = await context.new_page()
                await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=self.settings.RENDER_TIMEOUT_MS,
                )
                await asyncio.sleep(self.settings.RENDER_SETTLE_SECONDS)
                html: str = await page.content()
                return html
            finally:
                await browser.close()

    def fetch_lightweight(self, url: str) -> str:
        """Plain GET with browser-like headers; blocking.

        Raises:
            RetrievalError: on any non-200 status.
        """
        with curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        ) as session:
            resp = session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.settings.HTTP_TIMEOUT,
            )
        if resp.status_code != 200:
            raise RetrievalError(f"HTTP {resp.status_code} from {url}")
        text: str = resp.text
        return text

    async def retrieve(self, source: SourceDefinition, query: str) -> str:
        """Return usable markup for *query* on *source*.

        Raises:
            RetrievalError: both tiers failed or produced unusable markup.
        """
        url = source.search_url(query)

        self.logger.info("[%s] Rendering %s", source.name, url)
        try:
            html = await self.fetch_rendered(url)
            if self.is_usable(html, source.name):
                self.logger.info(
                    "[%s] Rendered %d bytes", source.name, len(html)
                )
                return html
        except Exception as exc:
            self.logger.warning(
                "[%s] Browser fetch failed, trying HTTP fallback: %s",
                source.name,
                exc,
                exc_info=True,
            )

        self.logger.info("[%s] HTTP fallback for %s", source.name, url)
        try:
            html = await asyncio.to_thread(self.fetch_lightweight, url)
        except Exception as exc:
            raise RetrievalError(
                f"[{source.name}] All retrieval methods failed: {exc}"
            ) from exc
        if not self.is_usable(html, source.name):
            raise RetrievalError(
                f"[{source.name}] HTTP fallback returned unusable markup"
            )
        self.logger.info(
            "[%s] Fetched %d bytes over HTTP", source.name, len(html)
        )
        return html
