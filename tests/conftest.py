import copy
import json

import pytest

from confplanner.data_loader import ConferenceData
from confplanner.favorites import Favorites

RAW_DOCUMENT = {
    "schedule": [
        {
            "date": "2047-05-17",
            "groups": [
                {
                    "time": "9:00 am",
                    "sessions": [
                        {
                            "name": "Intro to X",
                            "description": "Getting started.",
                            "speakerNames": ["Alice"],
                            "timeStart": "9:00 am",
                            "timeEnd": "9:45 am",
                            "location": "Room 1",
                            "tracks": ["design"],
                        }
                    ],
                },
                {
                    "time": "10:00 am",
                    "sessions": [
                        {
                            "name": "Deep Dive Y",
                            "description": "Going further.",
                            "speakerNames": [],
                            "timeStart": "10:00 am",
                            "timeEnd": "11:00 am",
                            "location": "Room 2",
                            "tracks": ["dev"],
                        }
                    ],
                },
            ],
        }
    ],
    "speakers": [{"name": "Alice", "twitter": "alice"}],
    "map": [{"name": "Venue", "lat": 1.5, "long": 2.5, "centre": True}],
}


class CountingFetcher:
    """Async fetcher that returns a fresh copy of a raw document and counts calls."""

    def __init__(self, raw: dict | None = None, error: Exception | None = None):
        self.raw = raw if raw is not None else RAW_DOCUMENT
        self.error = error
        self.calls = 0

    async def __call__(self) -> dict:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.raw)


@pytest.fixture
def raw_document() -> dict:
    return copy.deepcopy(RAW_DOCUMENT)


@pytest.fixture
def make_fetcher():
    return CountingFetcher


@pytest.fixture
def fetcher() -> CountingFetcher:
    return CountingFetcher()


@pytest.fixture
def favorites() -> Favorites:
    return Favorites()


@pytest.fixture
def conference_data(fetcher, favorites) -> ConferenceData:
    return ConferenceData(favorites=favorites, fetcher=fetcher)


@pytest.fixture
def data_file(tmp_path, raw_document):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(raw_document), encoding="utf-8")
    return path
