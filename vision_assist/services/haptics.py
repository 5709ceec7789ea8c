"""Haptic Morse playback on a single shared vibration device.

The device is exclusively owned by one playback at a time.  Every public
playback on :class:`HapticSequencer` claims the shared
:class:`PlaybackSession` before the first pulse and releases it on every
exit path (completion, device error, :meth:`HapticSequencer.stop`).  A
playback requested while another one is in flight is a no-op, so two
patterns never interleave on the user's wrist.

Timings are fixed: users learn the patterns by feel.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Coroutine, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Final, Protocol, runtime_checkable

import structlog

from vision_assist.models.enums import ImpactStyle
from vision_assist.services.morse import encode_emotion

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Timing (seconds)
# ---------------------------------------------------------------------------

DOT_DURATION: Final[float] = 0.1
DASH_DURATION: Final[float] = 0.3
SYMBOL_GAP: Final[float] = 0.1
LETTER_GAP: Final[float] = 0.3
WORD_GAP: Final[float] = 0.7

NOTIFICATION_PAUSE: Final[float] = 0.1
ALERT_PAUSE: Final[float] = 0.2

_SYMBOL_PULSES: Final[dict[str, tuple[ImpactStyle, float]]] = {
    ".": (ImpactStyle.LIGHT, DOT_DURATION),
    "-": (ImpactStyle.MEDIUM, DASH_DURATION),
}


# ---------------------------------------------------------------------------
# Device protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class HapticDevice(Protocol):
    """Vibration motor with intensity-only control.

    ``impact`` fires a single pulse; it has no duration parameter, the
    sequencer times the surrounding waits itself.
    """

    async def impact(self, style: ImpactStyle) -> None: ...


# ---------------------------------------------------------------------------
# Single-flight state
# ---------------------------------------------------------------------------


class PlaybackBusyError(RuntimeError):
    """Raised by :meth:`PlaybackSession.hold` when a playback is in flight."""


class PlaybackSession:
    """Owned in-flight flag for the haptic device.

    All callers run on one event loop, and :meth:`try_acquire` never
    suspends, so the test-and-set cannot be interleaved.
    """

    __slots__ = ("_in_flight",)

    def __init__(self) -> None:
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def try_acquire(self) -> bool:
        if self._in_flight:
            return False
        self._in_flight = True
        return True

    def release(self) -> None:
        self._in_flight = False

    @contextmanager
    def hold(self) -> Iterator[None]:
        if not self.try_acquire():
            raise PlaybackBusyError("haptic playback already in flight")
        try:
            yield
        finally:
            self.release()


# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------


class HapticSequencer:
    """Plays Morse patterns, emotions and fixed cues on a :class:`HapticDevice`.

    Public playback methods return ``True`` when the playback ran to the
    end and ``False`` when it was skipped because another one was in
    flight, or when it was interrupted by :meth:`stop`.
    """

    __slots__ = ("_device", "_session", "_sleep", "_task")

    def __init__(
        self,
        device: HapticDevice,
        session: PlaybackSession | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._device = device
        self._session = session if session is not None else PlaybackSession()
        self._sleep = sleep
        self._task: asyncio.Task[None] | None = None

    @property
    def session(self) -> PlaybackSession:
        return self._session

    @property
    def busy(self) -> bool:
        return self._session.in_flight

    # -- public API ---------------------------------------------------------

    async def play_pattern(self, pattern: str) -> bool:
        return await self._exclusive(self._play_pattern(pattern), kind="pattern")

    async def play_emotion(self, emotion: str) -> bool:
        return await self._exclusive(self._play_emotion(emotion), kind="emotion")

    async def play_emotions_sequence(self, emotions: Sequence[str]) -> bool:
        return await self._exclusive(
            self._play_emotions_sequence(list(emotions)),
            kind="emotions_sequence",
        )

    async def play_notification(self) -> bool:
        return await self._exclusive(
            self._play_repeated(ImpactStyle.LIGHT, NOTIFICATION_PAUSE),
            kind="notification",
        )

    async def play_alert(self) -> bool:
        return await self._exclusive(
            self._play_repeated(ImpactStyle.HEAVY, ALERT_PAUSE),
            kind="alert",
        )

    def stop(self) -> bool:
        """Abort the playback in flight, if any.  Returns whether one was stopped."""
        task = self._task
        if task is None or task.done():
            return False
        task.cancel()
        logger.info("haptics.stop_requested")
        return True

    # -- internals ----------------------------------------------------------

    async def _exclusive(self, work: Coroutine[Any, Any, None], *, kind: str) -> bool:
        try:
            with self._session.hold():
                return await self._run(work, kind=kind)
        except PlaybackBusyError:
            work.close()
            logger.info("haptics.playback_skipped", kind=kind, reason="in_flight")
            return False

    async def _run(self, work: Coroutine[Any, Any, None], *, kind: str) -> bool:
        task = asyncio.create_task(work)
        self._task = task
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info("haptics.playback_stopped", kind=kind)
            return False
        finally:
            self._task = None

        logger.debug("haptics.playback_done", kind=kind)
        return True

    async def _play_pattern(self, pattern: str) -> None:
        symbols = [symbol for symbol in pattern if not symbol.isspace()]
        last = len(symbols) - 1
        for index, symbol in enumerate(symbols):
            pulse = _SYMBOL_PULSES.get(symbol)
            if pulse is not None:
                style, duration = pulse
                await self._device.impact(style)
                await self._sleep(duration)
            if index < last:
                await self._sleep(SYMBOL_GAP)

    async def _play_emotion(self, emotion: str) -> None:
        pattern = encode_emotion(emotion)
        if pattern:
            await self._play_pattern(pattern)
        await self._sleep(WORD_GAP)

    async def _play_emotions_sequence(self, emotions: list[str]) -> None:
        last = len(emotions) - 1
        for index, emotion in enumerate(emotions):
            await self._play_emotion(emotion)
            if index < last:
                await self._sleep(LETTER_GAP)

    async def _play_repeated(self, style: ImpactStyle, pause: float) -> None:
        for _ in range(3):
            await self._device.impact(style)
            await self._sleep(pause)
