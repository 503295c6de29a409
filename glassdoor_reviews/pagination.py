import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

log = logging.getLogger("pagination")

NEXT_SELECTORS = [
    'button[data-test="pagination-next"]',
    'a[data-test="pagination-next"]',
    'button[aria-label="Next"]',
    'span[aria-label="Next"]',
    "a.nextButton",
]


class NextControlState(str, Enum):
    MISSING = "missing"
    HIDDEN = "hidden"
    DISABLED = "disabled"
    READY = "ready"


def classify_next_control(count: int, visible: bool, disabled: bool, class_name: Optional[str]) -> NextControlState:
    if count == 0:
        return NextControlState.MISSING
    if not visible:
        return NextControlState.HIDDEN
    # glassdoor sometimes marks the last page with a "disabled" class instead of the attribute
    if disabled or "disabled" in (class_name or ""):
        return NextControlState.DISABLED
    return NextControlState.READY


async def paginate(
    extract_page: Callable[[int], Awaitable[object]],
    probe_next: Callable[[int], Awaitable[NextControlState]],
    activate_next: Callable[[int], Awaitable[object]],
    max_pages: int,
) -> int:
    """Extract, probe the next control, click it; repeat until it is not READY.

    Returns the number of pages extracted, never more than ``max_pages``.
    """
    pages = 0
    while pages < max_pages:
        pages += 1
        await extract_page(pages)
        state = await probe_next(pages)
        if state is not NextControlState.READY:
            log.info("Stopping after page %d: next control %s", pages, state.value)
            break
        if pages >= max_pages:
            log.info("Reached page cap (%d)", max_pages)
            break
        await activate_next(pages)
    return pages
