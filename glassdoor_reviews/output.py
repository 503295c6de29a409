import json
import logging
from pathlib import Path
from typing import Iterable, List

from glassdoor_reviews.models import Review

log = logging.getLogger("output")


class ReviewStore:
    """Flat JSON array of reviews, rewritten in full on every append."""

    def __init__(self, path):
        self.path = Path(path)

    def reset(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if self.path.exists():
            self.path.unlink()
            log.info("Deleted old data file %s", self.path)

    def load(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Could not read %s (%s); starting from an empty store", self.path, e)
            return []
        if not isinstance(data, list):
            log.warning("%s does not hold a JSON array; starting from an empty store", self.path)
            return []
        return data

    def append(self, reviews: Iterable[Review]) -> int:
        batch = [r.model_dump(mode="json") for r in reviews]
        combined = self.load() + batch
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(combined, f, indent=2, default=str, ensure_ascii=False)
        return len(batch)

    def __len__(self) -> int:
        return len(self.load())
