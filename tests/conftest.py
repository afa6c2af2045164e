"""
Shared fixtures: a scriptable frame loader and small product catalogs.
"""

import asyncio
from typing import Dict, Iterable, Optional, Set

import pytest

from frameview.lifecycle.task_registry import TaskRegistry
from frameview.models.color_option import ColorOption
from frameview.models.product import ProductConfig

BASE_URL = "https://cdn.test/360"


class FakeFrameLoader:
    """
    In-memory IFrameLoader.

    A frame "exists" when its index is listed under its color id in
    `existing`. URLs are parsed as .../{color}/{index}.webp so the loader works
    with any base url and product id.

    When a gate is given every load blocks until the gate is set, which lets
    tests observe in-flight state.
    """

    def __init__(
        self,
        existing: Optional[Dict[str, Iterable[int]]] = None,
        gate: Optional[asyncio.Event] = None,
        raise_for: Iterable[int] = (),
    ):
        self.existing: Dict[str, Set[int]] = {c: set(f) for c, f in (existing or {}).items()}
        self.gate = gate
        self.raise_for = set(raise_for)
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    @staticmethod
    def parse(url: str):
        color_id, filename = url.rsplit("/", 2)[-2:]
        return color_id, int(filename.split(".")[0])

    async def load(self, url: str) -> bool:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)

            color_id, index = self.parse(url)
            if index in self.raise_for:
                raise RuntimeError(f"loader exploded on {url}")
            return index in self.existing.get(color_id, set())
        finally:
            self.in_flight -= 1

    def calls_for(self, color_id: str):
        return [self.parse(u)[1] for u in self.calls if self.parse(u)[0] == color_id]


@pytest.fixture(autouse=True)
def reset_task_registry():
    TaskRegistry.reset()
    yield
    TaskRegistry.reset()


@pytest.fixture
def colors():
    return [
        ColorOption(id="orange", name="Sunrise Orange", hex="#E2661C", background_color="#F7E4D6"),
        ColorOption(id="black", name="Crystal Black", hex="#111111"),
    ]


@pytest.fixture
def explicit_color():
    return ColorOption(id="grey", name="Grey", hex="#7A7D80", explicit_frames=(4, 0, 2))


@pytest.fixture
def product(colors):
    return ProductConfig(id="tank-300", name="TANK 300", colors=tuple(colors), total_frames=10)


@pytest.fixture
def explicit_product():
    return ProductConfig(
        id="tank-500",
        name="TANK 500",
        colors=(
            ColorOption(id="grey", name="Grey", hex="#7A7D80", explicit_frames=(0, 2, 4)),
            ColorOption(id="black", name="Black", hex="#000000", explicit_frames=(1, 3)),
        ),
        total_frames=6,
    )


async def drain(times: int = 5) -> None:
    """Let scheduled tasks run."""
    for _ in range(times):
        await asyncio.sleep(0)
