"""Capture-cycle orchestrator for Vision Assist.

Coordinates one frame end to end: image analysis, spoken description
and Morse emotion feedback.  The capture loop never waits on haptics:
emotion playback runs as a background task, and a frame whose emotions
arrive while a previous sequence is still vibrating gets speech only.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterable
from typing import TYPE_CHECKING

import structlog

from vision_assist.models.analysis import AnalysisResult
from vision_assist.models.enums import VisionErrorKind
from vision_assist.services.audio_description import compose

if TYPE_CHECKING:
    from vision_assist.services.haptics import HapticSequencer
    from vision_assist.services.speech import SpeechAnnouncer
    from vision_assist.services.vision import ImageAnalyzer

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class FeedbackOrchestrator:
    """Turns captured frames into speech and haptic feedback.

    Feature toggles mirror the user's emotion settings:

    * ``emotion_detection_enabled`` -- keep detected emotions in results
    * ``morse_code_enabled`` -- allow Morse playback at all
    * ``auto_play_morse`` -- play emotions automatically after each frame
    """

    __slots__ = (
        "_active",
        "_analyzer",
        "_announcer",
        "_auto_play_morse",
        "_emotion_detection_enabled",
        "_haptic_task",
        "_morse_code_enabled",
        "_sequencer",
    )

    def __init__(
        self,
        analyzer: ImageAnalyzer,
        announcer: SpeechAnnouncer,
        sequencer: HapticSequencer,
        *,
        emotion_detection_enabled: bool = True,
        morse_code_enabled: bool = True,
        auto_play_morse: bool = True,
    ) -> None:
        self._analyzer = analyzer
        self._announcer = announcer
        self._sequencer = sequencer
        self._emotion_detection_enabled = emotion_detection_enabled
        self._morse_code_enabled = morse_code_enabled
        self._auto_play_morse = auto_play_morse
        self._active = False
        self._haptic_task: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        self._active = True
        logger.info("pipeline.capture_started")

    async def stop(self) -> None:
        """Deactivate capture and cut any speech or vibration in progress."""
        self._active = False
        self._sequencer.stop()
        await self._announcer.silence()
        logger.info("pipeline.capture_stopped")

    async def wait_for_feedback(self) -> None:
        """Wait until the background emotion playback, if any, has finished."""
        task = self._haptic_task
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    # ------------------------------------------------------------------
    # Capture cycle
    # ------------------------------------------------------------------

    async def run(self, frames: AsyncIterable[bytes]) -> int:
        """Process *frames* until the iterable ends or capture is deactivated.

        Returns the number of frames processed.
        """
        self.start()
        processed = 0
        async for frame in frames:
            if not self._active:
                break
            await self.process_frame(frame)
            processed += 1
            if not self._active:
                break
        return processed

    async def process_frame(self, image: bytes) -> AnalysisResult:
        """Analyse one frame, speak the result and schedule emotion feedback."""
        start = time.perf_counter()
        result = await self._analyzer.analyze(image)

        if not result.success:
            logger.info("pipeline.analysis_failed", kind=result.error_kind, error=result.error)
            if result.error_kind is VisionErrorKind.QUOTA and self._active:
                self._active = False
                logger.warning("pipeline.capture_deactivated", reason="quota_exceeded")
        elif result.emotions and not self._emotion_detection_enabled:
            result = result.model_copy(update={"emotions": ()})

        await self._announcer.announce(compose(result))

        if result.success and result.emotions:
            self._schedule_emotions(result)

        logger.info(
            "pipeline.frame_processed",
            success=result.success,
            emotions=len(result.emotions),
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return result

    # ------------------------------------------------------------------
    # Haptics
    # ------------------------------------------------------------------

    def _schedule_emotions(self, result: AnalysisResult) -> None:
        if not (self._morse_code_enabled and self._auto_play_morse):
            return
        pending = self._haptic_task is not None and not self._haptic_task.done()
        if pending or self._sequencer.busy:
            logger.info("pipeline.haptics_skipped", reason="in_flight")
            return
        self._haptic_task = asyncio.create_task(self._play_emotions(list(result.emotions)))

    async def _play_emotions(self, emotions: list[str]) -> None:
        try:
            await self._sequencer.play_emotions_sequence(emotions)
        except Exception:
            logger.warning("pipeline.haptics_failed", emotions=emotions, exc_info=True)
