from dateutil import parser as dateparser
from datetime import datetime, date, timezone
from pathlib import Path
from urllib.parse import urljoin
import random
import re

def parse_date_fuzzy(s):
    if not s:
        return None
    try:
        dt = dateparser.parse(str(s), fuzzy=True)
        return dt.date() if isinstance(dt, datetime) else dt
    except (ValueError, OverflowError):
        return None

def safe_filename(s: str) -> str:
    return re.sub(r'[^A-Za-z0-9\-_\.]+', '_', s).strip('_')

def iso_now():
    return datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"

def ensure_dir(path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p

def absolute_url(href: str, base_url: str) -> str:
    # glassdoor result cards mostly hand out site-relative hrefs
    if href.startswith("/"):
        return urljoin(base_url, href)
    return href

def delay_ms(low: int, high: int) -> int:
    """Fixed-plus-random delay in milliseconds, ``low`` <= result <= ``high``."""
    if high <= low:
        return low
    return low + int(random.random() * (high - low))
