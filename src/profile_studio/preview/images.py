"""Load tracking for externally generated stat-card images.

Stats cards are served by third-party services that can be slow or down.
The preview never blocks on them: every card starts in ``loading`` and is
resolved to ``loaded`` or ``error`` by the host, or forced to ``error`` once
its timeout elapses.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Literal

logger = logging.getLogger(__name__)

ImageStatus = Literal["loading", "loaded", "error"]

DEFAULT_TIMEOUT_SECONDS = 3.0


class StatCardImage:
    """Load state for one stat-card image URL.

    Transitions are one-way: ``loading -> loaded`` or ``loading -> error``.
    Reports after the image has settled are ignored.
    """

    def __init__(
        self,
        src: str,
        alt: str,
        card_type: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.src = src
        self.alt = alt
        self.card_type = card_type
        self.timeout = timeout
        self._clock = clock
        self._started = clock()
        self._status: ImageStatus = "loading"
        self._settled = asyncio.Event()

    @property
    def status(self) -> ImageStatus:
        if self._status == "loading" and self.elapsed >= self.timeout:
            logger.debug("Image timed out after %.1fs: %s", self.timeout, self.src)
            self._settle("error")
        return self._status

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started

    def mark_loaded(self) -> None:
        if self.status == "loading":
            self._settle("loaded")

    def mark_error(self) -> None:
        if self.status == "loading":
            self._settle("error")

    def _settle(self, status: ImageStatus) -> None:
        self._status = status
        self._settled.set()

    async def wait(self) -> ImageStatus:
        """Wait until the image settles, bounded by the remaining timeout.

        Returns:
            The final status; ``error`` if the timeout elapsed first
        """
        if self.status != "loading":
            return self._status

        remaining = max(0.0, self.timeout - self.elapsed)
        try:
            await asyncio.wait_for(self._settled.wait(), timeout=remaining)
        except asyncio.TimeoutError:
            logger.debug("Gave up waiting for image: %s", self.src)
            self._settle("error")
        return self._status


class ImageTracker:
    """Registry of stat-card images keyed by URL.

    Tracking the same URL twice returns the existing entry so load state
    survives re-renders of the same output.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self._clock = clock
        self._images: dict[str, StatCardImage] = {}

    def track(self, src: str, alt: str, card_type: str) -> StatCardImage:
        image = self._images.get(src)
        if image is None:
            image = StatCardImage(src, alt, card_type, timeout=self.timeout, clock=self._clock)
            self._images[src] = image
        return image

    def get(self, src: str) -> StatCardImage | None:
        return self._images.get(src)

    def mark_loaded(self, src: str) -> None:
        if image := self._images.get(src):
            image.mark_loaded()

    def mark_error(self, src: str) -> None:
        if image := self._images.get(src):
            image.mark_error()

    def pending(self) -> list[StatCardImage]:
        """Images still loading."""
        return [image for image in self._images.values() if image.status == "loading"]

    async def wait_all(self) -> dict[str, ImageStatus]:
        """Wait for every tracked image to settle or time out."""
        images = list(self._images.values())
        statuses = await asyncio.gather(*(image.wait() for image in images))
        return {image.src: status for image, status in zip(images, statuses)}

    def __len__(self) -> int:
        return len(self._images)
