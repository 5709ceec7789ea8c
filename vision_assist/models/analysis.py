"""Structured outcomes of one image analysis cycle."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vision_assist.models.enums import Emotion, VisionErrorKind

ANALYSIS_FAILED_DESCRIPTION = "Unable to analyze the image. Please try again."


class ParsedResponse(BaseModel):
    """Fields extracted from a free-text vision response."""

    model_config = ConfigDict(frozen=True)

    description: str
    objects: tuple[str, ...] = ()
    hazards: tuple[str, ...] = ()
    emotions: tuple[Emotion, ...] = ()


class AnalysisResult(BaseModel):
    """Outcome of analysing a single captured frame.

    Immutable once built. ``emotions`` only ever holds taxonomy members,
    deduplicated in first-occurrence order. A failed result carries a
    user-facing ``error`` and ``description``; ``error_kind`` lets the
    capture loop tell quota exhaustion apart from retry-eligible failures.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    description: str
    objects: tuple[str, ...] = ()
    hazards: tuple[str, ...] = ()
    emotions: tuple[Emotion, ...] = ()
    error: str | None = None
    error_kind: VisionErrorKind | None = None
    raw_response: str | None = None

    @field_validator("emotions")
    @classmethod
    def dedupe_emotions(cls, v: tuple[Emotion, ...]) -> tuple[Emotion, ...]:
        return tuple(dict.fromkeys(v))

    @classmethod
    def from_parsed(cls, parsed: ParsedResponse, raw_response: str | None = None) -> AnalysisResult:
        return cls(
            success=True,
            description=parsed.description,
            objects=parsed.objects,
            hazards=parsed.hazards,
            emotions=parsed.emotions,
            raw_response=raw_response,
        )

    @classmethod
    def failure(
        cls,
        error: str,
        kind: VisionErrorKind = VisionErrorKind.FAILURE,
        description: str = ANALYSIS_FAILED_DESCRIPTION,
    ) -> AnalysisResult:
        return cls(success=False, description=description, error=error, error_kind=kind)


class SpeechOptions(BaseModel):
    """Voice parameters passed with every utterance."""

    model_config = ConfigDict(frozen=True)

    language: str = "en"
    pitch: float = Field(default=1.0, gt=0)
    rate: float = Field(default=0.9, gt=0)
