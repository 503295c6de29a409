# glassdoor_reviews/cli.py
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, List

import typer
from pydantic import ValidationError

from glassdoor_reviews.config import load_settings, read_companies_file
from glassdoor_reviews.output import ReviewStore
from glassdoor_reviews.parsing import extract_reviews
from glassdoor_reviews.scrapers import GlassdoorScraper

app = typer.Typer()
logging.basicConfig(level=logging.INFO)


@app.command()
def scrape(
    company: Optional[List[str]] = typer.Option(None, help="Company name (repeatable); overrides the configured list"),
    companies_file: Optional[Path] = typer.Option(None, help="Text file with one company per line"),
    config: Optional[Path] = typer.Option(None, help="JSON settings file"),
    output: Optional[Path] = typer.Option(None, help="Output JSON file (truncated at start)"),
    max_pages: Optional[int] = typer.Option(None, help="Max review pages per company"),
    headless: Optional[bool] = typer.Option(None, help="Run browser headless (--no-headless to watch / log in)"),
    debug_dir: Optional[Path] = typer.Option(None, help="Directory for debug screenshots and HTML"),
):
    companies = list(company) if company else None
    try:
        if companies_file is not None:
            companies = read_companies_file(companies_file)
        settings = load_settings(
            config,
            companies=companies,
            output_file=output,
            max_pages=max_pages,
            headless=headless,
            debug_dir=debug_dir,
        )
    except (OSError, ValueError, ValidationError) as e:
        typer.echo(f"Invalid configuration: {e}")
        raise typer.Exit(code=1)

    typer.echo(f"Scraping {len(settings.companies)} companies into {settings.output_file} ...")
    summary = asyncio.run(GlassdoorScraper(settings).run())
    for outcome in summary.companies:
        status = outcome.error_kind or "ok"
        typer.echo(f"{outcome.company}: {outcome.reviews} reviews, {outcome.pages} pages [{status}]")
    typer.echo(f"Wrote {summary.total_reviews} reviews to {summary.output_file}")


@app.command()
def parse(
    html_file: Path = typer.Argument(..., help="Saved page HTML (e.g. a debug artifact)"),
    company: str = typer.Option(..., help="Company name to stamp on each review"),
    output: Optional[Path] = typer.Option(None, help="Append to this JSON store instead of printing"),
    verbose: bool = typer.Option(False, help="Log the first parsed review"),
):
    try:
        html = html_file.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        typer.echo(f"Cannot read {html_file}: {e}")
        raise typer.Exit(code=1)

    reviews = extract_reviews(html, company)
    if verbose and reviews:
        logging.info(f"First review: {reviews[0].model_dump(mode='json')}")
    if output is None:
        typer.echo(json.dumps([r.model_dump(mode="json") for r in reviews], indent=2, ensure_ascii=False))
        return
    ReviewStore(output).append(reviews)
    typer.echo(f"Appended {len(reviews)} reviews to {output}")


if __name__ == "__main__":
    app()
