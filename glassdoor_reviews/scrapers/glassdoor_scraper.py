"""
Glassdoor scraper: search-first company lookup on a persistent, logged-in session.

Each company is searched for by name instead of following stored links, which
on Glassdoor often redirect to the wrong employer. Review cards are parsed
from page HTML by :mod:`glassdoor_reviews.parsing`.
"""
import logging
from typing import Iterable, List, Optional

from playwright.async_api import Page, Locator, Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from glassdoor_reviews.errors import NavigationError
from glassdoor_reviews.models import Review
from glassdoor_reviews.pagination import NEXT_SELECTORS, NextControlState, classify_next_control
from glassdoor_reviews.parsing import extract_reviews
from glassdoor_reviews.scrapers.async_base_scraper import AsyncBaseScraper
from glassdoor_reviews.strategies import Strategy, afirst_success
from glassdoor_reviews.utils import absolute_url

log = logging.getLogger("glassdoor")

BLOCK_TITLE_MARKERS = ["Access Denied", "Cloudflare"]
LOGIN_URL_MARKERS = ["login", "signin", "Account"]

SEARCH_TRIGGER = 'button[data-test="search-button"]'
SEARCH_INPUT = 'input[data-test="search-bar-keyword-input"], input[id="sc.keyword"], input[placeholder*="Company"]'
SEARCH_SUBMIT = 'button[data-test="search-bar-submit"], button[type="submit"]'
LOGO_LINK = "div#MainCol a:has(img)"
REVIEW_TAB_LINKS = 'a[href*="/Reviews/"], a[data-test="review-tab"]'
EXPAND_BUTTONS = 'div[class*="continueReading"], button.showMore'


def is_listing_url(url: str) -> bool:
    return "Reviews" in url and "Overview" not in url


def pick_reviews_link(hrefs: Iterable[Optional[str]]) -> Optional[str]:
    """First company-specific reviews link; ``Reviews/index.htm`` is the global nav."""
    for href in hrefs:
        if href and "Reviews-E" in href and "Reviews/index.htm" not in href:
            return href
    return None


def first_word(company: str) -> str:
    return company.split(" ")[0]


async def _visible_href(locator: Locator) -> Optional[str]:
    try:
        if await locator.is_visible():
            return await locator.get_attribute("href")
    except PlaywrightError as e:
        log.debug("link lookup failed: %s", e)
    return None


async def _exact_name(page: Page, company: str) -> Optional[str]:
    return await _visible_href(page.get_by_role("link", name=company, exact=False).first)


async def _first_word(page: Page, company: str) -> Optional[str]:
    return await _visible_href(page.get_by_role("link", name=first_word(company), exact=False).first)


async def _logo_link(page: Page, company: str) -> Optional[str]:
    return await _visible_href(page.locator(LOGO_LINK).first)


RESULT_STRATEGIES = [
    Strategy("exact_name", _exact_name),
    Strategy("first_word", _first_word),
    Strategy("logo_link", _logo_link),
]


def _next_selector_strategy(selector: str) -> Strategy:
    async def find(page: Page) -> Optional[Locator]:
        locator = page.locator(selector).first
        return locator if await locator.count() else None
    return Strategy(selector, find)


NEXT_STRATEGIES = [_next_selector_strategy(sel) for sel in NEXT_SELECTORS]


class GlassdoorScraper(AsyncBaseScraper):

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._next_control: Optional[Locator] = None

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    async def bootstrap_session(self, page: Page) -> None:
        log.info("1. Navigating to Glassdoor Homepage...")
        try:
            await page.goto(f"{self.base_url}/index.htm", wait_until="domcontentloaded",
                            timeout=self.settings.navigation_timeout_ms)
        except PlaywrightError as e:
            log.error("   ! Error loading homepage, you might be IP blocked: %s", e)
        await self.accept_cookies(page)

        title = await page.title()
        if any(m in title for m in BLOCK_TITLE_MARKERS):
            log.warning("--- BLOCKED BY FIREWALL --- solve the CAPTCHA in the browser window now.")
            await page.wait_for_timeout(self.settings.captcha_wait_ms)

        log.info("2. Checking Login Status...")
        await page.wait_for_timeout(3000)
        if not any(m in page.url for m in LOGIN_URL_MARKERS):
            log.info("--- ALREADY LOGGED IN (Session Loaded) ---")
            return
        log.warning("--- LOGIN REQUIRED --- sign in manually; waiting up to %ds",
                    self.settings.login_timeout_ms // 1000)
        try:
            await page.wait_for_function(
                "markers => !markers.some(m => window.location.href.includes(m))",
                arg=LOGIN_URL_MARKERS,
                timeout=self.settings.login_timeout_ms,
            )
            log.info("--- Login Detected! ---")
            await page.wait_for_timeout(3000)
        except PlaywrightTimeoutError:
            log.warning("--- Timeout waiting for login. Attempting to proceed... ---")

    async def _submit_search(self, page: Page, company: str) -> None:
        trigger = page.locator(SEARCH_TRIGGER).first
        # the visible button is a decoy that activates the real input
        if await trigger.is_visible():
            await trigger.click()
            await page.wait_for_timeout(500)

        search_input = page.locator(SEARCH_INPUT).first
        if not await search_input.is_visible():
            raise NavigationError("could not find search input")
        await search_input.click(force=True)
        await search_input.fill("")
        await search_input.fill(company)
        await page.wait_for_timeout(500)

        submit = page.locator(SEARCH_SUBMIT).first
        if await submit.is_visible():
            await submit.click()
        else:
            await page.keyboard.press("Enter")

    async def find_reviews_page(self, page: Page, company: str) -> Optional[str]:
        await page.goto(f"{self.base_url}/Reviews/index.htm", wait_until="domcontentloaded")
        await self.pause(page, self.settings.search_delay_ms)

        log.info('   Searching for "%s"...', company)
        await self._submit_search(page, company)
        await page.wait_for_load_state("domcontentloaded")
        await self.pause(page, self.settings.search_delay_ms)

        result = await afirst_success(RESULT_STRATEGIES, page, company)
        if result is None:
            log.warning("   ! Could not identify a search result for %s", company)
            return None
        target = absolute_url(result.value, self.base_url)
        log.info("   Found %s match URL: %s", result.name, target)
        await page.goto(target, wait_until="domcontentloaded")
        await self.pause(page, self.settings.search_delay_ms)

        if is_listing_url(page.url):
            return page.url

        log.info("   Switching to Reviews tab...")
        hrefs = [await link.get_attribute("href") for link in await page.locator(REVIEW_TAB_LINKS).all()]
        reviews_link = pick_reviews_link(hrefs)
        if not reviews_link:
            log.warning("   ! Could not find specific Company Reviews tab for %s", company)
            return None
        url = absolute_url(reviews_link, self.base_url)
        log.info("   Navigating to Reviews URL: %s", url)
        await page.goto(url, wait_until="domcontentloaded")
        await self.pause(page, self.settings.search_delay_ms)
        return page.url

    async def _expand_reviews(self, page: Page) -> None:
        for btn in await page.locator(EXPAND_BUTTONS).all():
            try:
                if await btn.is_visible():
                    await btn.click()
                    await page.wait_for_timeout(200)
            except PlaywrightError as e:
                log.debug("expand click failed: %s", e)

    async def extract_reviews_from_page(self, page: Page, company: str) -> List[Review]:
        # scroll past the "Highlights" block before reading
        await page.evaluate("window.scrollBy(0, 4000)")
        await self.pause(page, self.settings.page_delay_ms)
        await self._expand_reviews(page)
        return extract_reviews(await page.content(), company)

    async def probe_next_page(self, page: Page) -> NextControlState:
        await page.evaluate("window.scrollTo(0, document.body.scrollHeight)")
        await page.wait_for_timeout(2000)
        self._next_control = None
        result = await afirst_success(NEXT_STRATEGIES, page)
        if result is None:
            return classify_next_control(0, False, False, None)
        control = result.value
        state = classify_next_control(
            1,
            await control.is_visible(),
            await control.is_disabled(),
            await control.get_attribute("class"),
        )
        if state is NextControlState.READY:
            self._next_control = control
        return state

    async def go_to_next_page(self, page: Page) -> None:
        if self._next_control is None:
            raise NavigationError("next control was not probed")
        await self._next_control.scroll_into_view_if_needed()
        await self._next_control.click(force=True)
        self._next_control = None
        await self.pause(page, self.settings.next_delay_ms)
