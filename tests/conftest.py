# tests/conftest.py

"""
Pytest Fixtures - HTML review cards and temporary stores shared by the test modules
"""

import pytest

from glassdoor_reviews.models import Review
from glassdoor_reviews.output import ReviewStore


REVIEW_CARD = """
<li class="empReview">
  <span class="ratingNumber">4.0</span>
  <h2><a href="/Reviews/Employee-Review-Enbridge-RVW9876543.htm">Great place to grow</a></h2>
  <div>Nov 28, 2025 - Current Employee - Engineer</div>
  <div><span>Pros</span><p>good pay and benefits</p></div>
  <div><span>Cons</span><p>long hours</p></div>
  <div><span>Advice to Management</span><p>listen to field staff</p></div>
  <div>Helpful (3)</div>
</li>
"""


def wrap_page(*cards: str, nav: bool = True) -> str:
    menu = "<ul><li><a href='/Reviews/index.htm'>Reviews</a></li><li>Jobs</li></ul>" if nav else ""
    return f"<html><head><script>var x = 'Pros Cons';</script></head><body>{menu}{''.join(cards)}</body></html>"


@pytest.fixture
def review_card():
    return REVIEW_CARD


@pytest.fixture
def review_page():
    return wrap_page(REVIEW_CARD, REVIEW_CARD.replace("4.0", "2.0").replace("long hours", "no growth"))


@pytest.fixture
def store(tmp_path):
    return ReviewStore(tmp_path / "out" / "glassdoor_data.json")


@pytest.fixture
def make_reviews():
    def _make(n, company="Enbridge", start=0):
        return [
            Review(company=company, rating=4.0, title=f"review {i}", pros="good pay")
            for i in range(start, start + n)
        ]
    return _make
