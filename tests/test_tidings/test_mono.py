"""Tests for the single-channel emitter."""
from __future__ import annotations

import asyncio

import pytest

from tidings import LimitExceededError, ListenerError, MonoEmitter, SignatureMismatchError, WaitTimeoutError


class TestMonoEmitterListeners:
    def test_add_and_count(self) -> None:
        mono = MonoEmitter()
        a, b = (lambda: "a"), (lambda: "b")
        mono.add_listener(a)
        mono.on(b)
        assert mono.listeners == [a, b]
        assert mono.listener_count == 2

    def test_listeners_is_a_copy(self) -> None:
        mono = MonoEmitter()
        mono.on(lambda: None)
        mono.listeners.clear()
        assert mono.listener_count == 1

    def test_remove_listener_removes_duplicates(self) -> None:
        mono = MonoEmitter()
        a = lambda: None  # noqa: E731
        mono.on(a, a)
        mono.remove_listener(a)
        assert mono.listener_count == 0

    def test_clear(self) -> None:
        mono = MonoEmitter()
        mono.on(lambda: None, lambda: None)
        mono.clear()
        assert mono.listener_count == 0

    def test_max_listeners_constructor_and_setter(self) -> None:
        mono = MonoEmitter(max_listeners=2)
        assert mono.max_listeners == 2
        mono.on(lambda: 1, lambda: 2)
        with pytest.raises(LimitExceededError) as info:
            mono.on(lambda: 3)
        assert info.value.key is None
        assert "mono emitter" in str(info.value)
        mono.max_listeners = 0
        mono.on(lambda: 3)
        assert mono.listener_count == 3

    def test_invalid_max_listeners(self) -> None:
        mono = MonoEmitter()
        with pytest.raises(ValueError):
            mono.max_listeners = -2

    def test_arity(self) -> None:
        mono = MonoEmitter(arity=1)
        with pytest.raises(SignatureMismatchError):
            mono.on(lambda: None)
        mono.on(lambda value: value + 1)
        assert mono.emit_sync(1) == [2]
        with pytest.raises(SignatureMismatchError):
            mono.emit_sync()


class TestMonoEmitterAsync:
    @pytest.mark.asyncio
    async def test_emit(self) -> None:
        mono = MonoEmitter()

        async def double(value):
            return value * 2

        mono.on(double, lambda value: value)
        assert await mono.emit(5) == [10, 5]

    @pytest.mark.asyncio
    async def test_emit_failure(self) -> None:
        mono = MonoEmitter()

        async def boom():
            raise RuntimeError("nope")

        mono.on(boom)
        with pytest.raises(ListenerError):
            await mono.emit()

    @pytest.mark.asyncio
    async def test_wait_and_timeout(self) -> None:
        mono = MonoEmitter()
        future = mono.wait()
        mono.emit_sync("done")
        assert await future == ("done",)

        with pytest.raises(WaitTimeoutError):
            await mono.wait(timeout_ms=20)
        assert mono.listener_count == 0

    @pytest.mark.asyncio
    async def test_iterate_and_once(self) -> None:
        mono = MonoEmitter()
        stream = mono.iterate()

        async def pull():
            return await stream.__anext__()

        task = asyncio.create_task(pull())
        await asyncio.sleep(0)
        mono.emit_sync(1)
        assert await task == (1,)
        await stream.aclose()

        once = asyncio.create_task(mono.once(lambda value: value * 3))
        await asyncio.sleep(0)
        await mono.emit(4)
        assert await once == [12]
        assert mono.listener_count == 0

    @pytest.mark.asyncio
    async def test_wait_and_once_work_at_the_cap(self) -> None:
        mono = MonoEmitter(max_listeners=1)
        mono.on(lambda value: value)
        future = mono.wait()
        once = asyncio.create_task(mono.once(lambda value: value + 1))
        await asyncio.sleep(0)
        assert mono.listener_count == 3
        mono.emit_sync(1)
        assert await future == (1,)
        assert await once == [2]
        assert mono.listener_count == 1
