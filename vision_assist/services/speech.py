"""Spoken output for analysis descriptions.

Speech is a separate channel from haptics.  A new announcement
supersedes the one in progress instead of queueing behind it, and a
failing speech engine never interrupts the capture cycle.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import structlog

from vision_assist.models.analysis import SpeechOptions

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@runtime_checkable
class SpeechOutput(Protocol):
    """Text-to-speech engine on the device."""

    async def speak(self, text: str, options: SpeechOptions) -> None: ...

    async def stop(self) -> None: ...


class SpeechAnnouncer:
    """Best-effort wrapper around a :class:`SpeechOutput`."""

    __slots__ = ("_options", "_output")

    def __init__(self, output: SpeechOutput, options: SpeechOptions | None = None) -> None:
        self._output = output
        self._options = options if options is not None else SpeechOptions()

    @property
    def options(self) -> SpeechOptions:
        return self._options

    async def announce(self, text: str) -> bool:
        """Stop the current utterance and speak *text*.  Returns whether it was spoken."""
        if not text.strip():
            return False
        try:
            await self._output.stop()
            await self._output.speak(text, self._options)
        except Exception:
            logger.warning("speech.announce_failed", text_length=len(text), exc_info=True)
            return False
        logger.debug("speech.announced", text_length=len(text), language=self._options.language)
        return True

    async def silence(self) -> None:
        try:
            await self._output.stop()
        except Exception:
            logger.warning("speech.stop_failed", exc_info=True)
