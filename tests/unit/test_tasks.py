"""Tests for detached background tasks."""

import asyncio

import pytest

from app.tasks import DetachedTasks


class TestDetachedTasks:
    @pytest.mark.asyncio
    async def test_result_available_on_task(self):
        tasks = DetachedTasks()

        async def work():
            return 42

        task = tasks.spawn(work(), name="answer")
        assert task.get_name() == "answer"
        assert await task == 42
        await tasks.drain()
        assert tasks.pending == 0
        assert tasks.failed == 0

    @pytest.mark.asyncio
    async def test_failure_counted_not_raised(self):
        tasks = DetachedTasks()

        async def boom():
            raise RuntimeError("disk full")

        tasks.spawn(boom())
        tasks.spawn(boom())
        await tasks.drain()
        assert tasks.failed == 2
        assert tasks.pending == 0

    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks_spawned_while_draining(self):
        tasks = DetachedTasks()
        done = []

        async def child():
            await asyncio.sleep(0.01)
            done.append("child")

        async def parent():
            await asyncio.sleep(0.01)
            tasks.spawn(child())
            done.append("parent")

        tasks.spawn(parent())
        await tasks.drain()
        assert done == ["parent", "child"]

    @pytest.mark.asyncio
    async def test_cancelled_task_is_not_a_failure(self):
        tasks = DetachedTasks()
        task = tasks.spawn(asyncio.sleep(10))
        task.cancel()
        await tasks.drain()
        assert tasks.failed == 0
        assert tasks.pending == 0

    def test_spawn_requires_running_loop(self):
        tasks = DetachedTasks()
        coro = asyncio.sleep(0)
        with pytest.raises(RuntimeError):
            tasks.spawn(coro)
        coro.close()
