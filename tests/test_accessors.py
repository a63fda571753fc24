import asyncio

from confplanner.data_loader import ConferenceData


def test_speakers_sorted_by_last_name(make_fetcher, raw_document):
    raw_document["speakers"] = [
        {"name": "Zoe Adams"},
        {"name": "Bob Young"},
        {"name": "Alice Mills"},
        {"name": "Cher"},
    ]
    data = ConferenceData(fetcher=make_fetcher(raw_document))
    speakers = asyncio.run(data.get_speakers())
    assert [s.name for s in speakers] == ["Zoe Adams", "Cher", "Alice Mills", "Bob Young"]


def test_speaker_sort_is_stable_for_same_last_name(make_fetcher, raw_document):
    raw_document["speakers"] = [
        {"name": "Sam Lee"},
        {"name": "Ann Lee"},
        {"name": "Kim Abe"},
    ]
    data = ConferenceData(fetcher=make_fetcher(raw_document))
    speakers = asyncio.run(data.get_speakers())
    assert [s.name for s in speakers] == ["Kim Abe", "Sam Lee", "Ann Lee"]


def test_get_speakers_leaves_document_order(conference_data):
    async def go():
        await conference_data.get_speakers()
        return await conference_data.load()

    document = asyncio.run(go())
    assert [s.name for s in document.speakers] == ["Alice"]


def test_tracks_sorted(make_fetcher, raw_document):
    groups = raw_document["schedule"][0]["groups"]
    groups[0]["sessions"][0]["tracks"] = ["web", "design"]
    groups[1]["sessions"][0]["tracks"] = ["api", "web"]
    data = ConferenceData(fetcher=make_fetcher(raw_document))
    assert asyncio.run(data.get_tracks()) == ["api", "design", "web"]
    assert asyncio.run(data.load()).tracks == ["web", "design", "api"]


def test_map_in_document_order(make_fetcher, raw_document):
    raw_document["map"] = [
        {"name": "B", "lat": 1, "long": 2},
        {"name": "A", "lat": 3, "long": 4, "centre": True},
    ]
    data = ConferenceData(fetcher=make_fetcher(raw_document))
    pins = asyncio.run(data.get_map())
    assert [p.name for p in pins] == ["B", "A"]
    assert asyncio.run(data.center_pin()).name == "A"


def test_lookups(conference_data):
    session = asyncio.run(conference_data.get_session("Deep Dive Y"))
    speaker = asyncio.run(conference_data.get_speaker("Alice"))
    assert session.location == "Room 2"
    assert speaker.sessions[0].name == "Intro to X"
    assert asyncio.run(conference_data.get_session("Missing")) is None
    assert asyncio.run(conference_data.get_speaker("Missing")) is None


def test_accessors_share_one_fetch(conference_data, fetcher):
    asyncio.run(conference_data.get_speakers())
    asyncio.run(conference_data.get_tracks())
    asyncio.run(conference_data.get_map())
    asyncio.run(conference_data.get_timeline(0))
    assert fetcher.calls == 1


def test_accented_last_names_collate_with_their_base_letter(make_fetcher, raw_document):
    raw_document["speakers"] = [
        {"name": "Zed Zimmer"},
        {"name": "Emile Éclair"},
        {"name": "Ann Fox"},
    ]
    data = ConferenceData(fetcher=make_fetcher(raw_document))
    speakers = asyncio.run(data.get_speakers())
    assert [s.name for s in speakers] == ["Emile Éclair", "Ann Fox", "Zed Zimmer"]
