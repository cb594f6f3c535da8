import pytest

from utils.observable import DerivedObservable, Observable


def test_subscribe_replays_current_value():
    obs = Observable(3)
    seen = []
    obs.subscribe(seen.append)
    assert seen == [3]


def test_set_notifies_in_subscription_order():
    obs = Observable(0)
    calls = []
    obs.subscribe(lambda v: calls.append(("a", v)))
    obs.subscribe(lambda v: calls.append(("b", v)))
    calls.clear()

    obs.set(1)

    assert calls == [("a", 1), ("b", 1)]


def test_set_with_equal_value_still_notifies():
    obs = Observable([])
    seen = []
    obs.subscribe(seen.append)
    obs.set([])
    assert seen == [[], []]


def test_unsubscribe_stops_notifications():
    obs = Observable("x")
    seen = []
    unsubscribe = obs.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    obs.set("y")
    assert seen == ["x"]
    assert obs.listener_count == 0


def test_failing_listener_does_not_block_others(caplog):
    obs = Observable(0)
    seen = []

    def boom(value):
        if value:
            raise RuntimeError("listener broke")

    obs.subscribe(boom)
    obs.subscribe(seen.append)
    obs.set(5)

    assert seen == [0, 5]
    assert "listener" in caplog.text


def test_map_follows_source_until_closed():
    source = Observable([1, 2, 3])
    doubled = source.map(lambda xs: [x * 2 for x in xs])
    assert isinstance(doubled, DerivedObservable)
    assert doubled.value == [2, 4, 6]

    source.set([5])
    assert doubled.value == [10]

    doubled.close()
    assert doubled.closed
    assert source.listener_count == 0
    source.set([7])
    assert doubled.value == [10]


def test_derived_is_read_only():
    derived = Observable(1).map(str)
    with pytest.raises(TypeError):
        derived.set("2")
