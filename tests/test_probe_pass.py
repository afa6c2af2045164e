import pytest

from frameview.models.enums import ProbeMode
from frameview.models.probe import FrameLoadResult, ProbePass


def make_pass(mode=ProbeMode.AUTO_DETECT):
    return ProbePass(color_id="orange", mode=mode, total_frames=10)


class TestProbePass:
    def test_add_available_keeps_order_without_duplicates(self):
        p = make_pass()
        for i in (5, 1, 9, 5, 1):
            p.add_available(i)
        assert p.available == [1, 5, 9]

    def test_add_available_reports_insertions(self):
        p = make_pass()
        assert p.add_available(3) is True
        assert p.add_available(3) is False

    def test_set_available_sorts_and_dedupes(self):
        p = make_pass()
        p.set_available([4, 0, 4, 2])
        assert p.available == [0, 2, 4]

    def test_record(self):
        p = make_pass()
        p.pending = {1, 2}
        p.record(FrameLoadResult("orange", 1, True))
        p.record(FrameLoadResult("orange", 2, False))
        assert p.outstanding == 0
        assert p.loaded_count == 1
        assert p.failed == {2}
        assert p.attempted == {1, 2}

    def test_explicit_completion_drops_failed_frames(self):
        p = make_pass(ProbeMode.EXPLICIT)
        p.set_available([0, 2, 4])
        p.record(FrameLoadResult("orange", 2, False))
        p.mark_complete()
        assert p.available == [0, 4]
        assert p.complete

    def test_auto_completion_keeps_available(self):
        p = make_pass()
        p.set_available([1, 3])
        p.failed = {0, 2}
        p.mark_complete()
        assert p.available == [1, 3]

    @pytest.mark.asyncio
    async def test_wait_returns_after_completion(self):
        p = make_pass()
        p.mark_complete()
        await p.wait()
        assert p.complete

    @pytest.mark.asyncio
    async def test_cancel_releases_waiters(self):
        p = make_pass()
        p.pending = {1, 2}
        p.cancel()
        await p.wait()

        assert p.cancelled
        assert not p.complete
        assert p.outstanding == 0

    def test_cancel_after_completion_is_noop(self):
        p = make_pass()
        p.mark_complete()
        p.cancel()
        assert p.complete
        assert not p.cancelled
