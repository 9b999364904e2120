# lead_scout/fetcher.py
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Protocol
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import async_playwright, Browser, BrowserContext, Page, TimeoutError as PlaywrightTimeoutError

from .config import BotConfig
from .models import RawItem, SourceConfig
from . import utils


logger = logging.getLogger('LeadScout.Fetcher')
url_logger = logging.getLogger('VisitedURLs')


class Fetcher(Protocol):
    """Reads candidate items from one source. Fails soft: returns [] instead of raising."""

    async def fetch(self, source: SourceConfig) -> List[RawItem]:
        ...


def extract_items(html: str, base_url: str, source: SourceConfig) -> List[RawItem]:
    """Parse rendered page HTML into RawItems using the source's selectors."""
    soup = BeautifulSoup(html, "html.parser")
    items: List[RawItem] = []
    for el in soup.select(source.item_selector):
        try:
            text_el = el.select_one(source.text_selector) if source.text_selector else None
            text = (text_el or el).get_text(" ", strip=True)
            link_el = el.select_one(source.link_selector) if source.link_selector else None
            if link_el is None and el.name == 'a':
                link_el = el
            href = link_el.get("href") if link_el is not None else None
        except Exception as e:
            # A single malformed item should not cost the whole page
            logger.debug(f"Skipping unparsable item on {source.name}: {e}")
            continue
        if not text or not href:
            continue
        items.append(RawItem(text=text, url=urljoin(base_url, href), source=source.name))
        if len(items) >= source.max_items:
            break
    return items


class BrowserSession:
    """One crawl phase's browser context. Each fetch gets its own page."""

    def __init__(self, context: BrowserContext, config: BotConfig):
        self.context = context
        self.config = config

    async def fetch(self, source: SourceConfig) -> List[RawItem]:
        logger.info(f"Starting to scrape: {source.name}")
        if source.needs_login:
            logger.debug(f"{source.name} is marked needs_login; fetching without a session.")
        page: Optional[Page] = None
        try:
            page = await self.context.new_page()
            url_logger.info(f"SOURCE: {source.name} {source.url}")
            await page.goto(source.url, wait_until="domcontentloaded", timeout=self.config.navigation_timeout_ms)

            try:
                await page.wait_for_selector(source.wait_for_selector, timeout=self.config.selector_timeout_ms)
            except PlaywrightTimeoutError as e:
                logger.warning(f"Selector not found for {source.name}: {e}")
                return []

            if source.scroll_to_load:
                for _ in range(self.config.scroll_steps):
                    await page.evaluate("window.scrollBy(0, window.innerHeight)")
                    await asyncio.sleep(utils.random_delay(self.config.scroll_delay_range))

            items = extract_items(await page.content(), page.url, source)
            logger.info(f"Extracted {len(items)} items from {source.name}")
            return items
        except PlaywrightTimeoutError as e:
            logger.warning(f"Timed out scraping {source.name}: {e}")
            return []
        except Exception as e:
            logger.error(f"Error scraping {source.name}: {e}", exc_info=True)
            return []
        finally:
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.debug(f"Page close failed for {source.name}: {e}")


class PlaywrightFetcher:
    """Launches a headless Chromium per crawl phase."""

    def __init__(self, config: BotConfig):
        self.config = config

    @asynccontextmanager
    async def session(self) -> AsyncIterator[BrowserSession]:
        async with async_playwright() as p:
            browser: Browser = await p.chromium.launch(headless=self.config.headless, args=self.config.browser_args)
            try:
                context = await utils.new_context_with_profile(browser, locale="en-US")
                try:
                    logger.info("🌐 Browser session opened.")
                    yield BrowserSession(context, self.config)
                finally:
                    await context.close()
            finally:
                await browser.close()
                logger.info("✓ Browser closed.")
