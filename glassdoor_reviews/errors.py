class ScraperError(RuntimeError):
    """Base class for failures that end the current company but not the run."""

    kind = "scraper"


class NavigationError(ScraperError):
    kind = "navigation"


class LocatorMissError(ScraperError):
    """No search result or reviews tab could be matched for a company."""

    kind = "locator_miss"


STORAGE_KIND = "storage"


def error_kind(e: BaseException) -> str:
    """Outcome tag for an exception caught at company level."""
    if isinstance(e, ScraperError):
        return e.kind
    if isinstance(e, OSError):
        return STORAGE_KIND
    return NavigationError.kind
