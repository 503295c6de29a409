"""
Text-based review parsing.

Glassdoor's class names change from build to build, so review cards are read
from their visible text: keyword boundaries for Pros/Cons/Advice, a regex for
the "Nov 28, 2025" date, a leading "4.0" for the rating. Every pattern lives
in :class:`ParsingRules`; markup changes should only touch that data.

The functions here work on HTML (``page.content()`` or a saved debug file) and
never need a browser.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from pydantic import ValidationError

from glassdoor_reviews.models import Review
from glassdoor_reviews.strategies import Strategy, first_success

log = logging.getLogger("parsing")

BLOCK_TAGS = frozenset({
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
    "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "td", "th", "tr", "ul",
})
SKIP_TAGS = frozenset({"script", "style", "noscript", "template", "head"})

WHITESPACE = re.compile(r"\s+")
MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]{0,6}"


@dataclass(frozen=True)
class SectionRule:
    field: str
    keyword: str
    terminators: Tuple[str, ...]


@dataclass(frozen=True)
class ParsingRules:
    # aggregate blocks such as "4.1 (in 2,310 reviews)"
    noise_markers: Tuple[str, ...] = ("(in ", "reviews)")
    min_card_length: int = 50
    star_token: str = "Star"
    # tried in order; decorative star spans also match the class pattern
    rating_selectors: Tuple[str, ...] = (".ratingNumber", 'span[class*="rating"]')
    leading_rating: "re.Pattern" = re.compile(r"^[0-5]\.\d")
    number: "re.Pattern" = re.compile(r"\d+(?:\.\d+)?")
    # no trailing boundary: innerText glues the date to "Current Employee"
    date: "re.Pattern" = re.compile(rf"(?<![A-Za-z])({MONTH}\s\d{{1,2}},\s\d{{4}})")
    status_separators: "re.Pattern" = re.compile(r"^[\s\-–—|]+")
    title_selector: str = 'a[href*="/Reviews/Employee-Review"]'
    section_punctuation: str = " \t\r\n:-."
    sections: Tuple[SectionRule, ...] = (
        SectionRule("pros", "Pros", ("Cons", "Advice to Management", "Helpful")),
        SectionRule("cons", "Cons", ("Advice to Management", "Helpful")),
        SectionRule("advice", "Advice to Management", ("Helpful",)),
    )
    block_keywords: Tuple[str, ...] = ("Pros", "Cons")
    max_block_length: int = 2000


DEFAULT_RULES = ParsingRules()


def visible_text(node) -> str:
    """Approximate ``innerText``: block elements break lines, whitespace collapses."""
    parts: List[str] = []

    def walk(el):
        for child in el.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                # source whitespace collapses; only block boundaries break lines
                parts.append(WHITESPACE.sub(" ", str(child)))
                continue
            if not isinstance(child, Tag) or child.name in SKIP_TAGS:
                continue
            block = child.name in BLOCK_TAGS
            if block:
                parts.append("\n")
            walk(child)
            if block:
                parts.append("\n")

    walk(node)
    lines = (" ".join(line.split()) for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)


# --- text rules ---

def is_noise(text: str, rules: ParsingRules = DEFAULT_RULES) -> bool:
    return all(marker in text for marker in rules.noise_markers)


def extract_section(text: str, keyword: str, terminators, rules: ParsingRules = DEFAULT_RULES) -> Optional[str]:
    """Text between ``keyword`` and the nearest of ``terminators`` (or the end)."""
    start = text.find(keyword)
    if start == -1:
        return None
    start += len(keyword)
    end = len(text)
    for term in terminators:
        idx = text.find(term, start)
        if idx != -1 and idx < end:
            end = idx
    value = text[start:end].strip(rules.section_punctuation)
    return value or None


def extract_date(text: str, rules: ParsingRules = DEFAULT_RULES) -> Optional[str]:
    m = rules.date.search(text)
    return m.group(1) if m else None


def extract_job_title(text: str, date_text: Optional[str], rules: ParsingRules = DEFAULT_RULES) -> Optional[str]:
    # "Nov 28, 2025 - Current Employee - Engineer" -> "Current Employee - Engineer"
    if not date_text:
        return None
    for line in text.split("\n"):
        if date_text in line:
            status = rules.status_separators.sub("", line.replace(date_text, "", 1)).strip()
            return status or None
    return None


def parse_rating(value: Optional[str], rules: ParsingRules = DEFAULT_RULES) -> Optional[float]:
    if not value:
        return None
    m = rules.number.search(value)
    if not m:
        return None
    rating = float(m.group(0))
    if not 0 <= rating <= 5:
        return None
    return rating


def extract_rating(text: str, rating_text: Optional[str] = None, rules: ParsingRules = DEFAULT_RULES) -> Optional[float]:
    rating = parse_rating(rating_text, rules)
    if rating is None:
        m = rules.leading_rating.match(text)
        if m:
            rating = float(m.group(0))
    return rating


def parse_review_text(
    text: str,
    rating_text: Optional[str] = None,
    title: Optional[str] = None,
    rules: ParsingRules = DEFAULT_RULES,
) -> Dict[str, Optional[object]]:
    """Pull the review fields out of a card's visible text.

    ``rating_text`` is the text of a rating sub-element, if the card has one;
    ``title`` is the headline link text. No filtering happens here.
    """
    date_text = extract_date(text, rules)
    fields: Dict[str, Optional[object]] = {
        "rating": extract_rating(text, rating_text, rules),
        "date": date_text,
        "title": title or None,
        "job_title": extract_job_title(text, date_text, rules),
    }
    for section in rules.sections:
        fields[section.field] = extract_section(text, section.keyword, section.terminators, rules)
    return fields


# --- card level ---

def rating_element(node: Tag, rules: ParsingRules = DEFAULT_RULES) -> Optional[Tag]:
    for selector in rules.rating_selectors:
        el = node.select_one(selector)
        if el is not None:
            return el
    return None


def parse_review_card(node: Tag, company: str, rules: ParsingRules = DEFAULT_RULES) -> Optional[Review]:
    text = visible_text(node)
    if is_noise(text, rules) or len(text) < rules.min_card_length:
        return None
    rating_el = rating_element(node, rules)
    if rules.star_token not in text and rating_el is None:
        return None

    rating_text = visible_text(rating_el) if rating_el is not None else None
    link = node.select_one(rules.title_selector)
    title = visible_text(link) if link is not None else None

    fields = parse_review_text(text, rating_text=rating_text, title=title, rules=rules)
    try:
        review = Review(company=company, **fields)
    except ValidationError as e:
        log.warning("Skipping invalid review: %s", e)
        return None
    return review if review.is_retainable() else None


def outermost(nodes: List[Tag]) -> List[Tag]:
    """Drop every node that sits inside another node of the list."""
    ids = {id(n) for n in nodes}
    return [n for n in nodes if not any(id(p) in ids for p in n.parents)]


def section_block_candidates(soup, rules: ParsingRules = DEFAULT_RULES) -> List[Tag]:
    blocks = []
    for div in soup.find_all("div"):
        text = visible_text(div)
        if len(text) < rules.max_block_length and all(k in text for k in rules.block_keywords):
            blocks.append(div)
    return outermost(blocks)


def _parse_all(nodes, company, rules) -> List[Review]:
    reviews = []
    for node in nodes:
        review = parse_review_card(node, company, rules)
        if review is not None:
            reviews.append(review)
    return reviews


def _from_list_items(soup, company, rules):
    return _parse_all(soup.find_all("li"), company, rules)


def _from_section_blocks(soup, company, rules):
    return _parse_all(section_block_candidates(soup, rules), company, rules)


CANDIDATE_STRATEGIES = [
    Strategy("list_items", _from_list_items),
    Strategy("section_blocks", _from_section_blocks),
]


def extract_reviews(html: str, company: str, rules: ParsingRules = DEFAULT_RULES) -> List[Review]:
    soup = BeautifulSoup(html, "html.parser")
    result = first_success(CANDIDATE_STRATEGIES, soup, company, rules)
    if result is None:
        return []
    log.debug("%s: %d reviews via %s", company, len(result.value), result.name)
    return result.value
