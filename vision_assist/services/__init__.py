"""Vision Assist service layer -- parsing, Morse encoding, haptics, speech and analysis."""

from __future__ import annotations

from vision_assist.services.audio_description import compose
from vision_assist.services.haptics import (
    HapticDevice,
    HapticSequencer,
    PlaybackBusyError,
    PlaybackSession,
)
from vision_assist.services.morse import EMOTION_MORSE, encode_emotion, encode_text
from vision_assist.services.response_parser import normalize_emotion, parse
from vision_assist.services.speech import SpeechAnnouncer, SpeechOutput
from vision_assist.services.vision import (
    ANALYSIS_PROMPT,
    ImageAnalyzer,
    VisionAuthError,
    VisionError,
    VisionQuotaError,
    VisionRateLimitError,
    VisionTransport,
    classify_transport_error,
)

__all__ = [
    "ANALYSIS_PROMPT",
    "EMOTION_MORSE",
    "HapticDevice",
    "HapticSequencer",
    "ImageAnalyzer",
    "PlaybackBusyError",
    "PlaybackSession",
    "SpeechAnnouncer",
    "SpeechOutput",
    "VisionAuthError",
    "VisionError",
    "VisionQuotaError",
    "VisionRateLimitError",
    "VisionTransport",
    "classify_transport_error",
    "compose",
    "encode_emotion",
    "encode_text",
    "normalize_emotion",
    "parse",
]
