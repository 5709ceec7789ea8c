"""Labeled-section parser for free-text vision responses.

The vision model is asked to answer as::

    Description: ... Objects: ... Hazards: ... Emotions: ...

but nothing guarantees it will.  Parsing therefore never raises: each
missing section falls back to a default and malformed text simply yields
fewer fields.

Each section runs from the first ``<Label>:`` to the next occurrence of
*any* known label (or the end of the text).  A label word used inside a
sentence, e.g. ``"Objects: none found, Hazards: ..."``, still splits
there; this first-match policy is kept as is rather than guessed around.
"""

from __future__ import annotations

import re
from typing import Final

import structlog

from vision_assist.models.analysis import ParsedResponse
from vision_assist.models.enums import Emotion

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_LABELS: Final[tuple[str, ...]] = ("Description", "Objects", "Hazards", "Emotions")

_NEXT_LABEL: Final[str] = r"(?=\b(?:" + "|".join(_LABELS) + r")\s*:|\Z)"

_SECTION_RES: Final[dict[str, re.Pattern[str]]] = {
    label: re.compile(
        rf"\b{label}\s*:(?P<content>.*?){_NEXT_LABEL}",
        flags=re.IGNORECASE | re.DOTALL,
    )
    for label in _LABELS
}

_ITEM_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[,;]")

# ---------------------------------------------------------------------------
# Emotion vocabulary
# ---------------------------------------------------------------------------

EMOTION_SYNONYMS: Final[dict[str, Emotion]] = {
    "happy": Emotion.HAPPINESS,
    "joy": Emotion.HAPPINESS,
    "joyful": Emotion.HAPPINESS,
    "angry": Emotion.ANGER,
    "mad": Emotion.ANGER,
    "scared": Emotion.FEAR,
    "afraid": Emotion.FEAR,
    "surprised": Emotion.SURPRISE,
    "shocked": Emotion.SURPRISE,
    "disgusted": Emotion.DISGUST,
}


def normalize_emotion(token: str) -> Emotion | None:
    """Map a detected emotion word onto the six-emotion taxonomy.

    Containment is checked first, in both directions, so ``"sad"`` and
    ``"deep sadness"`` both land on :attr:`Emotion.SADNESS`.  This is
    permissive on purpose: ``"angered"`` also matches ``anger``.  The
    synonym table is consulted next; anything else returns ``None``.
    """
    token = token.strip().lower()
    if not token:
        return None
    for emotion in Emotion:
        if emotion.value in token or token in emotion.value:
            return emotion
    return EMOTION_SYNONYMS.get(token)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _section(text: str, label: str) -> str | None:
    match = _SECTION_RES[label].search(text)
    if match is None:
        return None
    return match.group("content").strip().removesuffix(".").rstrip()


def _split_items(content: str | None) -> tuple[str, ...]:
    if not content:
        return ()
    items = (item.strip() for item in _ITEM_SPLIT_RE.split(content))
    return tuple(item for item in items if item)


def parse_emotions(content: str | None) -> tuple[Emotion, ...]:
    """Normalise and deduplicate the items of an ``Emotions:`` section."""
    matched = (normalize_emotion(token) for token in _split_items(content))
    return tuple(dict.fromkeys(emotion for emotion in matched if emotion is not None))


def parse(raw_text: str) -> ParsedResponse:
    """Extract description, objects, hazards and emotions from *raw_text*."""
    description = _section(raw_text, "Description")
    parsed = ParsedResponse(
        description=description or raw_text,
        objects=_split_items(_section(raw_text, "Objects")),
        hazards=_split_items(_section(raw_text, "Hazards")),
        emotions=parse_emotions(_section(raw_text, "Emotions")),
    )
    logger.debug(
        "response_parser.parsed",
        labeled=description is not None,
        objects=len(parsed.objects),
        hazards=len(parsed.hazards),
        emotions=[emotion.value for emotion in parsed.emotions],
    )
    return parsed
