import asyncio

import pytest

from takeaway.restaurants.debounce import Debouncer


def test_rapid_pushes_fire_once_with_last_value():
    fired = []

    async def scenario():
        debouncer = Debouncer(0.05, fired.append)
        for text in ("a", "ab", "abc"):
            debouncer.push(text)
            await asyncio.sleep(0.01)
        await debouncer.join()

    asyncio.run(scenario())

    assert fired == ["abc"]


def test_pushes_separated_by_quiet_period_each_fire():
    fired = []

    async def scenario():
        debouncer = Debouncer(0.02, fired.append)
        debouncer.push("a")
        await asyncio.sleep(0.06)
        debouncer.push("ab")
        await debouncer.join()

    asyncio.run(scenario())

    assert fired == ["a", "ab"]


def test_repeated_value_is_dropped():
    fired = []

    async def scenario():
        debouncer = Debouncer(0.02, fired.append)
        debouncer.push("sushi")
        await debouncer.join()
        debouncer.push("sushi")
        assert not debouncer.pending
        await debouncer.join()

    asyncio.run(scenario())

    assert fired == ["sushi"]


def test_dedup_compares_with_previous_push_not_last_fired():
    fired = []

    async def scenario():
        debouncer = Debouncer(0.05, fired.append)
        debouncer.push("a")
        debouncer.push("ab")
        debouncer.push("a")
        await debouncer.join()

    asyncio.run(scenario())

    assert fired == ["a"]


def test_cancel_prevents_firing():
    fired = []

    async def scenario():
        debouncer = Debouncer(0.02, fired.append)
        debouncer.push("pizza")
        debouncer.cancel()
        await debouncer.join()
        await asyncio.sleep(0.04)

    asyncio.run(scenario())

    assert fired == []


def test_join_reraises_callback_error():
    def explode(value):
        raise RuntimeError(f"boom {value}")

    async def scenario():
        debouncer = Debouncer(0.0, explode)
        debouncer.push("x")
        await debouncer.join()

    with pytest.raises(RuntimeError, match="boom x"):
        asyncio.run(scenario())


def test_push_requires_running_loop():
    debouncer = Debouncer(0.01, lambda v: None)
    with pytest.raises(RuntimeError):
        debouncer.push("a")
