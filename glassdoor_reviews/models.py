# glassdoor_reviews/models.py
from pydantic import BaseModel, Field, ConfigDict, computed_field, field_validator
from typing import Optional, List
from datetime import date as Date
from glassdoor_reviews.utils import parse_date_fuzzy


class Review(BaseModel):
    model_config = ConfigDict(extra="ignore")
    company: str
    rating: Optional[float] = Field(None, ge=0, le=5)
    date: Optional[Date] = None
    title: Optional[str] = None
    job_title: Optional[str] = None  # employment status line, e.g. "Current Employee - Engineer"
    pros: Optional[str] = None
    cons: Optional[str] = None
    advice: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, v):
        if v is None or isinstance(v, Date):
            return v
        return parse_date_fuzzy(v)

    def is_retainable(self) -> bool:
        return self.rating is not None and bool(self.pros or self.cons or self.title)


class CompanyOutcome(BaseModel):
    model_config = ConfigDict(extra="ignore")
    company: str
    reviews_url: Optional[str] = None
    pages: int = 0
    reviews: int = 0
    error_kind: Optional[str] = None  # navigation | locator_miss | storage
    error: Optional[str] = None


class RunSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")
    output_file: str
    started_at: str
    finished_at: Optional[str] = None
    companies: List[CompanyOutcome] = Field(default_factory=list)

    @computed_field
    @property
    def total_reviews(self) -> int:
        return sum(c.reviews for c in self.companies)
