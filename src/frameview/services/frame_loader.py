"""
Frame loaders - fetch one frame asset and report whether it is usable.

A load never raises for an expected failure (missing frame, HTTP error,
undecodable body); it returns False and the prober records the frame as
unavailable.
"""

from __future__ import annotations

import asyncio
import io
from typing import Optional, Protocol

import aiohttp
from PIL import Image, UnidentifiedImageError

from frameview.utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.PROBE)


class IFrameLoader(Protocol):
    """
    Frame asset loader abstraction.

    Implementations:
    - resolve to True when the asset exists and decodes as an image
    - resolve to False otherwise (never raise for load failures)
    """

    async def load(self, url: str) -> bool:
        ...


def _decodes_as_image(data: bytes) -> bool:
    """Check that bytes are a complete, decodable image (WebP, PNG, JPEG...)."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
        return True
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return False


class HttpFrameLoader:
    """
    aiohttp based frame loader.

    One ClientSession is shared by every load of the process; it is created
    lazily on first use and closed with close().

    Example:
        loader = HttpFrameLoader(timeout=10.0)
        ok = await loader.load("https://cdn/360/tank_300/orange/0.webp")
        await loader.close()
    """

    def __init__(
        self,
        timeout: float = 10.0,
        verify_image: bool = True,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.timeout = timeout
        self.verify_image = verify_image
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True
        return self._session

    async def load(self, url: str) -> bool:
        session = self._get_session()
        try:
            async with session.get(url) as response:
                if response.status != 200:
                    log.debug("Frame not found", url=url, status=response.status)
                    return False
                data = await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warn("Frame request failed", url=url, error=type(e).__name__)
            return False

        if not self.verify_image:
            return True

        ok = await asyncio.to_thread(_decodes_as_image, data)
        if not ok:
            log.warn("Frame could not be decoded", url=url, size=len(data))
        return ok

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            log.debug("Frame loader session closed")
        self._session = None
