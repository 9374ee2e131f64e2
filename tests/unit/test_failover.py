import pytest

from relay.core.errors import AllProvidersFailedError, ProviderError
from relay.core.provider.failover import FailoverDispatcher
from relay.core.provider.rotation import RotationScheduler
from tests.fixtures.fake_providers import make_entry, make_registry


@pytest.mark.unit
@pytest.mark.asyncio
async def test_first_established_stream_wins(user_messages):
    registry = make_registry(
        make_entry("groq", fail=ProviderError("Groq", "rate limited", upstream_status=429)),
        make_entry("cerebras", fragments=("ok",)),
        make_entry("gemini"),
    )
    order = RotationScheduler(registry).rotation_order_from(0)

    result = await FailoverDispatcher().dispatch(user_messages, order)

    assert result.index == 1
    assert result.entry.id == "cerebras"
    assert [fragment async for fragment in result.stream] == ["ok"]
    assert registry.get(0).capability.calls == 1
    assert registry.get(2).capability.calls == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_follows_given_order_with_wraparound(user_messages):
    registry = make_registry(
        make_entry("groq"),
        make_entry("cerebras", fail=RuntimeError("down")),
        make_entry("gemini", fail=RuntimeError("down")),
    )
    order = RotationScheduler(registry).rotation_order_from(1)

    result = await FailoverDispatcher().dispatch(user_messages, order)

    assert result.index == 0
    assert [entry.capability.calls for entry in registry] == [1, 1, 1]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_all_failed_carries_attempts_and_last_error(user_messages):
    last = ProviderError("Gemini", "quota exceeded", upstream_status=429)
    registry = make_registry(
        make_entry("groq", fail=RuntimeError("first")),
        make_entry("gemini", fail=last),
    )
    order = RotationScheduler(registry).rotation_order_from(0)

    with pytest.raises(AllProvidersFailedError) as exc_info:
        await FailoverDispatcher().dispatch(user_messages, order)

    error = exc_info.value
    assert error.attempted == ["Groq", "Gemini"]
    assert error.last_error is last
    assert error.__cause__ is last
    assert error.status_code == 500
    assert error.public_message == "Internal Server Error"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_messages_are_forwarded_unchanged(user_messages):
    registry = make_registry(make_entry("groq"))
    order = RotationScheduler(registry).rotation_order_from(0)

    await FailoverDispatcher().dispatch(user_messages, order)

    assert registry.get(0).capability.last_messages == user_messages
