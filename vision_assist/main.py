"""Vision Assist entry point.

Configures structured logging and wires the host application's devices
and vision transport into a ready-to-run :class:`FeedbackOrchestrator`.
"""

from __future__ import annotations

import orjson
import structlog

from config.settings import Settings, settings
from vision_assist.models.analysis import SpeechOptions
from vision_assist.pipeline.orchestrator import FeedbackOrchestrator
from vision_assist.services.haptics import HapticDevice, HapticSequencer, PlaybackSession
from vision_assist.services.speech import SpeechAnnouncer, SpeechOutput
from vision_assist.services.vision import ImageAnalyzer, VisionTransport

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Structured logging configuration
# ---------------------------------------------------------------------------


def configure_logging(config: Settings = settings) -> None:
    """Set up structlog with JSON or console rendering based on settings."""
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if config.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer(serializer=orjson.dumps))
        logger_factory = structlog.BytesLoggerFactory()
    else:
        processors.append(structlog.dev.ConsoleRenderer())
        logger_factory = structlog.PrintLoggerFactory()

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            config.log_level,
        ),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_orchestrator(
    transport: VisionTransport,
    speech_output: SpeechOutput,
    haptic_device: HapticDevice,
    *,
    config: Settings = settings,
    session: PlaybackSession | None = None,
) -> FeedbackOrchestrator:
    """Assemble the analysis, speech and haptic services from *config*.

    Pass a shared *session* when other parts of the host application also
    drive the haptic device, so they all honour the same in-flight flag.
    """
    analyzer = ImageAnalyzer(
        transport,
        max_attempts=config.analysis_max_attempts,
        max_wait=config.analysis_retry_max_wait,
    )
    announcer = SpeechAnnouncer(
        speech_output,
        SpeechOptions(
            language=config.speech_language,
            pitch=config.speech_pitch,
            rate=config.speech_rate,
        ),
    )
    sequencer = HapticSequencer(haptic_device, session)

    logger.info(
        "app.orchestrator_built",
        env=config.env,
        emotion_detection=config.emotion_detection_enabled,
        morse_code=config.morse_code_enabled,
        auto_play_morse=config.auto_play_morse,
    )
    return FeedbackOrchestrator(
        analyzer,
        announcer,
        sequencer,
        emotion_detection_enabled=config.emotion_detection_enabled,
        morse_code_enabled=config.morse_code_enabled,
        auto_play_morse=config.auto_play_morse,
    )
