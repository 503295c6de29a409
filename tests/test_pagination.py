# tests/test_pagination.py

"""
Pagination Tests - next control classification and the page loop driver
"""

import asyncio

import pytest

from glassdoor_reviews.pagination import NextControlState, classify_next_control, paginate

READY = NextControlState.READY


def run_pages(states, max_pages):
    upcoming = iter(states)
    extracted, clicked = [], []

    async def extract_page(n):
        extracted.append(n)

    async def probe_next(n):
        return next(upcoming)

    async def activate_next(n):
        clicked.append(n)

    pages = asyncio.run(paginate(extract_page, probe_next, activate_next, max_pages))
    return pages, extracted, clicked


class TestClassifyNextControl:

    def test_missing(self):
        assert classify_next_control(0, False, False, None) is NextControlState.MISSING

    def test_hidden(self):
        assert classify_next_control(1, False, False, "") is NextControlState.HIDDEN

    def test_disabled_attribute(self):
        assert classify_next_control(1, True, True, None) is NextControlState.DISABLED

    def test_disabled_class(self):
        assert classify_next_control(1, True, False, "pageButton nextButton disabled") is NextControlState.DISABLED

    def test_ready(self):
        assert classify_next_control(1, True, False, "nextButton") is READY


class TestPaginate:

    def test_stops_on_disabled(self):
        pages, extracted, clicked = run_pages([READY, READY, NextControlState.DISABLED], max_pages=30)
        assert pages == 3
        assert extracted == [1, 2, 3]
        assert clicked == [1, 2]

    @pytest.mark.parametrize("stop", [NextControlState.MISSING, NextControlState.HIDDEN, NextControlState.DISABLED])
    def test_single_page_when_no_next(self, stop):
        pages, extracted, clicked = run_pages([stop], max_pages=30)
        assert pages == 1
        assert clicked == []

    def test_page_cap(self):
        pages, extracted, clicked = run_pages([READY] * 10, max_pages=4)
        assert pages == 4
        assert extracted == [1, 2, 3, 4]
        assert clicked == [1, 2, 3]

    def test_cap_equal_to_state_count(self):
        pages, _, clicked = run_pages([READY, READY, NextControlState.DISABLED], max_pages=3)
        assert pages == 3
        assert clicked == [1, 2]
