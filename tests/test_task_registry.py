import asyncio

import pytest

from frameview.lifecycle.task_registry import TaskCategory, TaskRegistry, create_tracked_task


async def sleeper():
    await asyncio.sleep(10)


async def boom():
    raise ValueError("boom")


class TestTaskRegistry:
    def test_singleton(self):
        assert TaskRegistry.instance() is TaskRegistry.instance()

    @pytest.mark.asyncio
    async def test_tracks_completion_states(self):
        registry = TaskRegistry.instance()

        running = create_tracked_task(sleeper(), category=TaskCategory.BACKGROUND, description="sleeper")
        failing = create_tracked_task(boom(), category=TaskCategory.BACKGROUND, description="boom")
        await asyncio.gather(failing, return_exceptions=True)
        await asyncio.sleep(0)

        assert [r.task for r in registry.active()] == [running]
        assert len(registry.failed()) == 1
        assert isinstance(registry.failed()[0].finished_with_error, ValueError)

        running.cancel()
        await asyncio.gather(running, return_exceptions=True)
        await asyncio.sleep(0)
        assert len(registry.cancelled()) == 1
        assert "failed=1" in registry.summary()

    @pytest.mark.asyncio
    async def test_cancel_owner(self):
        registry = TaskRegistry.instance()
        mine = [
            create_tracked_task(sleeper(), category=TaskCategory.PROBE, description=f"load {i}", owner="viewer-a")
            for i in range(3)
        ]
        other = create_tracked_task(sleeper(), category=TaskCategory.PROBE, description="other", owner="viewer-b")

        cancelled = registry.cancel_owner("viewer-a")
        await asyncio.gather(*mine, return_exceptions=True)

        assert set(cancelled) == set(mine)
        assert all(t.cancelled() for t in mine)
        assert not other.done()
        assert registry.active(owner="viewer-a") == []

        other.cancel()
        await asyncio.gather(other, return_exceptions=True)

    @pytest.mark.asyncio
    async def test_prunes_finished_records(self):
        registry = TaskRegistry(history_limit=2)

        async def quick():
            return 1

        for i in range(5):
            task = asyncio.get_running_loop().create_task(quick())
            registry.register(task, TaskCategory.BACKGROUND, f"quick {i}")
            await task

        assert len(registry.list_all()) <= 3

    @pytest.mark.asyncio
    async def test_prune_keeps_failure_not_yet_recorded(self):
        registry = TaskRegistry(history_limit=0)

        async def boom():
            raise RuntimeError("boom")

        task = asyncio.get_running_loop().create_task(boom())
        await asyncio.gather(task, return_exceptions=True)

        # Registering a finished task prunes before its done callback has run
        registry.register(task, TaskCategory.BACKGROUND, "late failure")
        await asyncio.sleep(0)

        assert [r.info.description for r in registry.failed()] == ["late failure"]

    @pytest.mark.asyncio
    async def test_tasks_for_shutdown_excludes(self):
        registry = TaskRegistry.instance()
        a = create_tracked_task(sleeper(), category=TaskCategory.API, description="api")
        b = create_tracked_task(sleeper(), category=TaskCategory.INPUT, description="input")

        assert registry.get_tasks_for_shutdown(exclude=[a]) == [b]

        for t in (a, b):
            t.cancel()
        await asyncio.gather(a, b, return_exceptions=True)
