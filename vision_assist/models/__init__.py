from vision_assist.models.analysis import (
    ANALYSIS_FAILED_DESCRIPTION,
    AnalysisResult,
    ParsedResponse,
    SpeechOptions,
)
from vision_assist.models.enums import Emotion, ImpactStyle, VisionErrorKind

__all__ = [
    "ANALYSIS_FAILED_DESCRIPTION",
    "AnalysisResult",
    "Emotion",
    "ImpactStyle",
    "ParsedResponse",
    "SpeechOptions",
    "VisionErrorKind",
]
