from glassdoor_reviews.scrapers.async_base_scraper import AsyncBaseScraper
from glassdoor_reviews.scrapers.glassdoor_scraper import GlassdoorScraper

__all__ = ["AsyncBaseScraper", "GlassdoorScraper"]
