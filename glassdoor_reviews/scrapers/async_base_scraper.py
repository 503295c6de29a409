import logging
from pathlib import Path
from typing import List, Optional

from playwright.async_api import async_playwright, Page, BrowserContext, Error as PlaywrightError

from glassdoor_reviews.config import Settings
from glassdoor_reviews.errors import ScraperError, LocatorMissError, error_kind
from glassdoor_reviews.models import Review, CompanyOutcome, RunSummary
from glassdoor_reviews.output import ReviewStore
from glassdoor_reviews.pagination import NextControlState, paginate
from glassdoor_reviews.utils import delay_ms, ensure_dir, iso_now, safe_filename

log = logging.getLogger("async_scraper")

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
BROWSER_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-infobars",
    "--window-position=0,0",
]


class AsyncBaseScraper:
    '''
    Drives one persistent browser session over the configured companies.

    Child classes must implement:
      - bootstrap_session(page)
      - find_reviews_page(page, company) -> Optional[str]
      - extract_reviews_from_page(page, company) -> list[Review]
      - probe_next_page(page) -> NextControlState
      - go_to_next_page(page)
    '''

    def __init__(self, settings: Settings, store: Optional[ReviewStore] = None):
        self.settings = settings
        self.store = store or ReviewStore(settings.output_file)

    async def pause(self, page: Page, window) -> None:
        await page.wait_for_timeout(delay_ms(*window))

    async def accept_cookies(self, page: Page) -> bool:
        selectors = [
            "#onetrust-accept-btn-handler",
            "button:has-text('Accept All')",
            "button:has-text('Accept all')",
            "button:has-text('Accept Cookies')",
            "button:has-text('I accept')",
        ]
        for sel in selectors:
            try:
                el = await page.query_selector(sel)
                if el and await el.is_visible():
                    await el.click()
                    await page.wait_for_timeout(300)
                    return True
            except PlaywrightError:
                continue
        return False

    async def debug_dump(self, page: Page, kind: str, company: str, page_num: Optional[int] = None, html: bool = False) -> None:
        name = f"debug_{kind}_{safe_filename(company)}"
        if page_num is not None:
            name += f"_page{page_num}"
        try:
            out = ensure_dir(self.settings.debug_dir)
            await page.screenshot(path=str(out / f"{name}.png"), full_page=True)
            if html:
                (out / f"{name}.html").write_text(await page.content(), encoding="utf-8")
        except (PlaywrightError, OSError) as e:
            log.error("   ! Screenshot/HTML failed: %s", e)

    async def _launch(self, p) -> BrowserContext:
        ensure_dir(self.settings.user_data_dir)
        context = await p.chromium.launch_persistent_context(
            str(Path(self.settings.user_data_dir)),
            headless=self.settings.headless,
            viewport={"width": 1920, "height": 1080},
            args=BROWSER_ARGS,
            user_agent=USER_AGENT,
        )
        context.set_default_navigation_timeout(self.settings.navigation_timeout_ms)
        return context

    async def run(self, companies: Optional[List[str]] = None) -> RunSummary:
        '''Reset the store, then scrape every company in order.'''
        companies = companies or self.settings.companies
        self.store.reset()
        ensure_dir(self.settings.debug_dir)
        summary = RunSummary(output_file=str(self.store.path), started_at=iso_now())
        log.info("--- LAUNCHING BROWSER ---")
        async with async_playwright() as p:
            context = await self._launch(p)
            try:
                # reuse the profile's default tab
                page = context.pages[0] if context.pages else await context.new_page()
                await self.bootstrap_session(page)
                for company in companies:
                    summary.companies.append(await self.scrape_company(page, company))
            finally:
                await context.close()
        summary.finished_at = iso_now()
        log.info("--- Scraper Finished: %d reviews in %s ---", summary.total_reviews, summary.output_file)
        return summary

    async def scrape_company(self, page: Page, company: str) -> CompanyOutcome:
        log.info("Targeting: %s", company)
        outcome = CompanyOutcome(company=company)
        try:
            url = await self.find_reviews_page(page, company)
            if not url:
                raise LocatorMissError(f"no reviews page found for {company}")
            outcome.reviews_url = url
        except (ScraperError, PlaywrightError, OSError) as e:
            kind = error_kind(e)
            log.error("   ! Search failed for %s: %s", company, e)
            outcome.error_kind, outcome.error = kind, str(e)
            await self.debug_dump(page, "search_fail" if kind != LocatorMissError.kind else "results_missing", company)
            return outcome

        async def extract_page(page_num: int) -> None:
            log.info("   Scraping Page %d...", page_num)
            outcome.pages = page_num
            reviews = await self.extract_reviews_from_page(page, company)
            if not reviews:
                log.warning("   ! No reviews found. Saving HTML debug file.")
                await self.debug_dump(page, "no_reviews", company, page_num, html=True)
                return
            outcome.reviews += self.store.append(reviews)
            log.info("   + Found %d reviews.", len(reviews))

        async def probe_next(page_num: int) -> NextControlState:
            state = await self.probe_next_page(page)
            if state is NextControlState.MISSING:
                log.warning("   Next button selector matched nothing.")
                await self.debug_dump(page, "no_next_button", company, page_num)
            elif state is NextControlState.HIDDEN:
                log.info("   Next button hidden.")
            elif state is NextControlState.DISABLED:
                log.info("   Reached end of reviews for %s.", company)
            return state

        async def activate_next(page_num: int) -> None:
            log.info("   Clicking Next...")
            await self.go_to_next_page(page)

        try:
            outcome.pages = await paginate(extract_page, probe_next, activate_next, self.settings.max_pages)
        except (ScraperError, PlaywrightError, OSError) as e:
            log.error("   Pagination error: %s", e)
            outcome.error_kind, outcome.error = error_kind(e), str(e)
        return outcome

    async def bootstrap_session(self, page: Page) -> None:
        raise NotImplementedError

    async def find_reviews_page(self, page: Page, company: str) -> Optional[str]:
        raise NotImplementedError

    async def extract_reviews_from_page(self, page: Page, company: str) -> List[Review]:
        raise NotImplementedError

    async def probe_next_page(self, page: Page) -> NextControlState:
        raise NotImplementedError

    async def go_to_next_page(self, page: Page) -> None:
        raise NotImplementedError
