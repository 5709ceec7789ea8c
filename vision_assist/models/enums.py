from __future__ import annotations

from enum import StrEnum


class Emotion(StrEnum):
    """The six basic emotions reported for faces in a frame."""

    __slots__ = ()

    HAPPINESS = "happiness"
    SADNESS = "sadness"
    ANGER = "anger"
    FEAR = "fear"
    SURPRISE = "surprise"
    DISGUST = "disgust"


class ImpactStyle(StrEnum):
    __slots__ = ()

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"


class VisionErrorKind(StrEnum):
    __slots__ = ()

    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    QUOTA = "quota"
    FAILURE = "failure"
