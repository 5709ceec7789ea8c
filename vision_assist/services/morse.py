"""International Morse encoding for text and emotion keywords.

Patterns are plain strings of ``.`` and ``-`` with a single space
between letters, e.g. ``encode_text("SAD") == "... .- -.."``.
"""

from __future__ import annotations

from typing import Final

from vision_assist.models.enums import Emotion

MORSE_TABLE: Final[dict[str, str]] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".",
    "F": "..-.", "G": "--.", "H": "....", "I": "..", "J": ".---",
    "K": "-.-", "L": ".-..", "M": "--", "N": "-.", "O": "---",
    "P": ".--.", "Q": "--.-", "R": ".-.", "S": "...", "T": "-",
    "U": "..-", "V": "...-", "W": ".--", "X": "-..-", "Y": "-.--",
    "Z": "--..",
    "0": "-----", "1": ".----", "2": "..---", "3": "...--",
    "4": "....-", "5": ".....", "6": "-....", "7": "--...",
    "8": "---..", "9": "----.",
}  # fmt: skip

# Each emotion is signalled by a short code word rather than its full name.
EMOTION_MORSE: Final[dict[Emotion, str]] = {
    Emotion.HAPPINESS: ".... .- .--. .--. -.--",  # HAPPY
    Emotion.SADNESS: "... .- -..",  # SAD
    Emotion.ANGER: ".- -. --. . .-.",  # ANGER
    Emotion.FEAR: "..-. . .- .-.",  # FEAR
    Emotion.SURPRISE: "... ..- .-. .--. .-. .. ... .",  # SURPRISE
    Emotion.DISGUST: "-.. .. ... --. ..- ... -",  # DISGUST
}


def encode_text(text: str) -> str:
    """Encode *text*, silently skipping anything outside A-Z and 0-9."""
    codes = (MORSE_TABLE.get(char) for char in text.upper())
    return " ".join(code for code in codes if code)


def encode_emotion(emotion: str) -> str:
    """Return the pattern for *emotion*, spelling it out when unknown."""
    try:
        return EMOTION_MORSE[Emotion(emotion.lower())]
    except ValueError:
        return encode_text(emotion)
