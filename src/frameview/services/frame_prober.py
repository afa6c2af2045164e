"""
Frame Availability Prober

Discovers which frame indices exist for a product/color and records loaded
frames in the viewer's FrameCache.

Two strategies:
- EXPLICIT: the color supplies a known-good list. Cached frames are skipped,
  the rest are loaded; frames that fail to load are dropped when the pass
  completes.
- AUTO_DETECT: every uncached index of 0..total_frames-1 is probed. Successes
  are merged into the pass's available list as they arrive, failures are
  expected (the frame simply does not exist).

Each load task pushes exactly one FrameLoadResult into a per-pass queue and a
single aggregating coroutine applies results in arrival order. Loads run under
a semaphore when max_concurrent_loads > 0.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Optional

from frameview.lifecycle.task_registry import create_tracked_task, TaskCategory
from frameview.models.color_option import ColorOption
from frameview.models.enums import ProbeMode
from frameview.models.frame_cache import FrameCache
from frameview.models.probe import FrameLoadResult, ProbePass
from frameview.services.frame_loader import IFrameLoader
from frameview.utils.frame_url import resolve_frame_url
from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PROBE)

ProbeListener = Callable[[ProbePass], Awaitable[None]]


class FrameProber:
    """
    Starts probing passes for one viewer.

    Example:
        prober = FrameProber(loader, cache, base_url=url, total_frames=24)
        probe_pass = prober.start("tank-300", color, on_update=viewer._on_probe_update)
        await probe_pass.wait()
    """

    def __init__(
        self,
        loader: IFrameLoader,
        cache: FrameCache,
        *,
        base_url: str,
        total_frames: int,
        max_concurrent_loads: int = 0,
        owner: Optional[str] = None,
    ):
        self.loader = loader
        self.cache = cache
        self.base_url = base_url
        self.total_frames = total_frames
        self.owner = owner
        self._semaphore: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(max_concurrent_loads) if max_concurrent_loads > 0 else None
        )

    # ============================================================
    # Pass creation
    # ============================================================

    def start(
        self,
        product_id: str,
        color: ColorOption,
        on_update: Optional[ProbeListener] = None,
    ) -> ProbePass:
        """
        Begin a probing pass for a color.

        Returns immediately. When every needed frame is already cached the
        returned pass is complete and no load is issued.
        """
        self.cache.ensure_color(color.id)

        if color.has_explicit_frames:
            probe_pass, to_load = self._prepare_explicit(color)
        else:
            probe_pass, to_load = self._prepare_auto_detect(color)

        if not to_load:
            probe_pass.mark_complete()
            log.info(
                "Probe pass served from cache",
                color=color.id,
                mode=probe_pass.mode.name,
                available=len(probe_pass.available)
            )
            return probe_pass

        probe_pass.pending = set(to_load)
        log.info(
            "Probe pass started",
            product=product_id,
            color=color.id,
            mode=probe_pass.mode.name,
            to_load=len(to_load),
            cached=probe_pass.loaded_count
        )

        create_tracked_task(
            self._run_pass(product_id, probe_pass, to_load, on_update),
            category=TaskCategory.PROBE,
            description=f"Probe pass {product_id}/{color.id} ({len(to_load)} frames)",
            owner=self.owner,
        )
        return probe_pass

    def _prepare_explicit(self, color: ColorOption):
        frames = sorted(set(color.explicit_frames or ()))
        known_failed = {f for f in frames if self.cache.is_failed(color.id, f)}
        probe_pass = ProbePass(
            color_id=color.id,
            mode=ProbeMode.EXPLICIT,
            total_frames=self.total_frames,
        )
        probe_pass.set_available(f for f in frames if f not in known_failed)
        probe_pass.failed.update(known_failed)

        to_load = [f for f in frames if not self.cache.is_resolved(color.id, f)]
        resolved = [f for f in frames if f not in to_load]
        probe_pass.loaded_count = len(resolved) - len(known_failed)
        probe_pass.attempted.update(resolved)
        return probe_pass, to_load

    def _prepare_auto_detect(self, color: ColorOption):
        cached = self.cache.loaded_frames(color.id)
        known_failed = self.cache.failed_frames(color.id)
        probe_pass = ProbePass(
            color_id=color.id,
            mode=ProbeMode.AUTO_DETECT,
            total_frames=self.total_frames,
        )
        probe_pass.set_available(cached)
        probe_pass.loaded_count = len(cached)
        probe_pass.attempted.update(cached)
        probe_pass.attempted.update(known_failed)
        probe_pass.failed.update(known_failed)

        to_load = [
            i for i in range(self.total_frames)
            if not self.cache.is_resolved(color.id, i)
        ]
        return probe_pass, to_load

    # ============================================================
    # Loading
    # ============================================================

    async def _run_pass(
        self,
        product_id: str,
        probe_pass: ProbePass,
        frames: List[int],
        on_update: Optional[ProbeListener],
    ) -> None:
        """Spawn one load per frame and aggregate their completion signals."""
        queue: asyncio.Queue[FrameLoadResult] = asyncio.Queue()

        for frame_index in frames:
            create_tracked_task(
                self._load_one(product_id, probe_pass.color_id, frame_index, queue),
                category=TaskCategory.PROBE,
                description=f"Load frame {product_id}/{probe_pass.color_id}/{frame_index}",
                owner=self.owner,
            )

        try:
            await self._aggregate(probe_pass, queue, len(frames), on_update)
        except asyncio.CancelledError:
            # Release anyone waiting on the pass (viewer closed, shutdown)
            probe_pass.cancel()
            raise

    async def _aggregate(
        self,
        probe_pass: ProbePass,
        queue: "asyncio.Queue[FrameLoadResult]",
        remaining: int,
        on_update: Optional[ProbeListener],
    ) -> None:
        while remaining:
            result = await queue.get()
            remaining -= 1
            self._apply(probe_pass, result)

            if not remaining:
                probe_pass.mark_complete()
                self._log_completion(probe_pass)

            if on_update is not None:
                try:
                    await on_update(probe_pass)
                except Exception as e:
                    log.error("Probe listener failed", color=probe_pass.color_id, exception=e)

    async def _load_one(
        self,
        product_id: str,
        color_id: str,
        frame_index: int,
        queue: "asyncio.Queue[FrameLoadResult]",
    ) -> None:
        url = resolve_frame_url(self.base_url, product_id, color_id, frame_index)
        try:
            if self._semaphore is not None:
                async with self._semaphore:
                    ok = await self.loader.load(url)
            else:
                ok = await self.loader.load(url)
        except Exception as e:
            log.error("Frame loader raised", url=url, exception=e)
            ok = False

        if not ok:
            log.debug(
                f"Could not load frame {frame_index} for {color_id} - this frame may not exist"
            )

        await queue.put(FrameLoadResult(color_id=color_id, frame_index=frame_index, ok=ok))

    def _apply(self, probe_pass: ProbePass, result: FrameLoadResult) -> None:
        probe_pass.record(result)
        if not result.ok:
            self.cache.mark_failed(result.color_id, result.frame_index)
            return

        self.cache.mark_loaded(result.color_id, result.frame_index)
        if probe_pass.mode == ProbeMode.AUTO_DETECT:
            probe_pass.add_available(result.frame_index)

    def _log_completion(self, probe_pass: ProbePass) -> None:
        if not probe_pass.available:
            log.error(f"No frames could be loaded for {probe_pass.color_id}")
            return

        log.info(
            "Probe pass complete",
            color=probe_pass.color_id,
            available=len(probe_pass.available),
            failed=len(probe_pass.failed)
        )
