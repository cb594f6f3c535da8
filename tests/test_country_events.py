import json

import httpx

from conftest import country
from services.country_events import format_event, stream_events


def _parse(message):
    event_line, data_line, *_ = message.split("\n")
    return event_line.removeprefix("event: "), json.loads(data_line.removeprefix("data: "))


def test_format_event():
    assert format_event("loading", True) == "event: loading\ndata: true\n\n"


async def test_stream_replays_state_then_pushes_changes(json_store):
    store = json_store([country("Alpha", "Republic of Alpha")])
    stream = stream_events(store)

    replay = [_parse(await anext(stream)) for _ in range(3)]
    assert replay == [("countries", []), ("loading", False), ("error", None)]

    await store.request_fetch()
    pushed = [_parse(await anext(stream)) for _ in range(4)]

    assert pushed == [
        ("error", None),
        ("loading", True),
        ("countries", [{"name": {"common": "Alpha", "official": "Republic of Alpha"}}]),
        ("loading", False),
    ]

    await stream.aclose()
    assert store.countries.listener_count == 0
    assert store.loading.listener_count == 0
    assert store.error.listener_count == 0


async def test_stream_serializes_errors(make_store):
    store = make_store(lambda request: httpx.Response(502))
    stream = stream_events(store)
    for _ in range(3):
        await anext(stream)

    await store.request_fetch()
    pushed = [_parse(await anext(stream)) for _ in range(4)]

    assert pushed[2] == ("error", {"kind": "server", "message": "Server Error: 502 - Bad Gateway"})
    await stream.aclose()
