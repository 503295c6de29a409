# tests/test_output.py

"""
Review Store Tests - reset, append and load of the JSON array store
"""

import json

from glassdoor_reviews.models import Review


class TestReviewStore:

    def test_load_missing_file(self, store):
        assert store.load() == []
        assert len(store) == 0

    def test_append_batches_preserves_order(self, store, make_reviews):
        store.reset()
        assert store.append(make_reviews(3)) == 3
        assert store.append(make_reviews(2, start=3)) == 2
        data = store.load()
        assert len(data) == 5
        assert [r["title"] for r in data] == [f"review {i}" for i in range(5)]

    def test_record_fields(self, store):
        store.append([Review(company="Keyera", rating=4.0, date="Nov 28, 2025", cons="long hours")])
        (record,) = store.load()
        assert record == {
            "company": "Keyera",
            "rating": 4.0,
            "date": "2025-11-28",
            "title": None,
            "job_title": None,
            "pros": None,
            "cons": "long hours",
            "advice": None,
        }

    def test_reset_truncates(self, store, make_reviews):
        store.append(make_reviews(4))
        store.reset()
        assert not store.path.exists()
        store.append(make_reviews(1))
        assert len(store.load()) == 1

    def test_duplicates_are_kept(self, store, make_reviews):
        batch = make_reviews(2)
        store.append(batch)
        store.append(batch)
        assert len(store) == 4

    def test_corrupt_file_treated_as_empty(self, store, make_reviews):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text("{not json", encoding="utf-8")
        store.append(make_reviews(2))
        assert len(store.load()) == 2

    def test_non_array_treated_as_empty(self, store, make_reviews):
        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_text(json.dumps({"reviews": []}), encoding="utf-8")
        assert store.load() == []
        store.append(make_reviews(1))
        assert len(store.load()) == 1

    def test_written_as_utf8_json_array(self, store):
        store.append([Review(company="Suncor Énergie", rating=3.0, pros="café")])
        raw = store.path.read_text(encoding="utf-8")
        assert "Suncor Énergie" in raw
        assert isinstance(json.loads(raw), list)
