"""Builds the sentence read aloud after each analysis."""

from __future__ import annotations

from vision_assist.models.analysis import AnalysisResult


def compose(result: AnalysisResult) -> str:
    # A failed result's description is already the user-facing message.
    if not result.success:
        return result.description

    text = result.description
    if result.hazards:
        text += f" Warning: {', '.join(result.hazards)}."
    if result.emotions:
        text += f" Detected emotions: {', '.join(emotion.value for emotion in result.emotions)}."
    return text
