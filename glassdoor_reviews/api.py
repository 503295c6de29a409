# glassdoor_reviews/api.py
import sys, asyncio, logging
from pathlib import Path
from typing import Optional, List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

from glassdoor_reviews.config import load_settings
from glassdoor_reviews.models import Review, RunSummary
from glassdoor_reviews.parsing import extract_reviews
from glassdoor_reviews.scrapers import GlassdoorScraper

log = logging.getLogger("api")

if sys.platform.startswith("win"):
    # Playwright needs subprocess support from the event loop on Windows
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())  # type: ignore[attr-defined]

app = FastAPI(title="Glassdoor Review Scraper API", version="0.1.0")


class ParseRequest(BaseModel):
    company: str
    html: Optional[str] = None
    # parse a saved page (e.g. a debug artifact) instead of inline HTML
    local_html: Optional[str] = None


class ParseResponse(BaseModel):
    company: str
    reviews: List[Review]
    meta: dict


class ScrapeRequest(BaseModel):
    companies: Optional[List[str]] = None
    output_file: Optional[str] = None
    max_pages: Optional[int] = None
    headless: bool = True


@app.get("/health")
async def health():
    import platform as _platform
    return {
        "status": "ok",
        "mode": "async",
        "python_version": _platform.python_version(),
        "platform": _platform.platform(),
    }


@app.post("/parse", response_model=ParseResponse)
async def parse(req: ParseRequest):
    if req.html is None and req.local_html is None:
        raise HTTPException(status_code=400, detail="Provide html or local_html")
    html = req.html
    if html is None:
        p = Path(req.local_html)
        if not p.is_file():
            raise HTTPException(status_code=400, detail=f"local_html is not a readable file: {req.local_html}")
        html = p.read_text(encoding="utf-8", errors="ignore")
    reviews = extract_reviews(html, req.company)
    return ParseResponse(company=req.company, reviews=reviews, meta={"reviews_found": len(reviews)})


@app.post("/scrape", response_model=RunSummary)
async def scrape(req: ScrapeRequest):
    try:
        settings = load_settings(
            companies=req.companies,
            output_file=req.output_file,
            max_pages=req.max_pages,
            headless=req.headless,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid settings: {e}")
    log.info("API scrape for %d companies", len(settings.companies))
    return await GlassdoorScraper(settings).run()
