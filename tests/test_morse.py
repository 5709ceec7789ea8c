"""Tests for the Morse encoder."""

from __future__ import annotations

import pytest

from vision_assist.models.enums import Emotion
from vision_assist.services.morse import (
    EMOTION_MORSE,
    MORSE_TABLE,
    encode_emotion,
    encode_text,
)


# -----------------------------------------------------------------------
# encode_text
# -----------------------------------------------------------------------


class TestEncodeText:
    def test_sos(self) -> None:
        assert encode_text("SOS") == "... --- ...", "SOS should encode to the classic distress pattern"

    def test_lowercase_input_is_uppercased(self) -> None:
        assert encode_text("sos") == encode_text("SOS"), "encoding should be case-insensitive"

    def test_digits(self) -> None:
        assert encode_text("05") == "----- .....", "digits should use the International Morse table"

    def test_spaces_and_punctuation_skipped(self) -> None:
        assert encode_text("a b!") == ".- -...", "unmapped characters, including spaces, should be skipped"

    def test_nothing_mappable_returns_empty(self) -> None:
        assert encode_text("!? ,.") == "", "text with no mappable characters should give an empty pattern"
        assert encode_text("") == ""

    @pytest.mark.parametrize(
        "text",
        ["E", "HELLO", "Vision Assist 2024", "room 101, floor 3", "x-y_z"],
    )
    def test_one_letter_group_per_alphanumeric(self, text: str) -> None:
        pattern = encode_text(text)
        expected = sum(1 for char in text.upper() if char in MORSE_TABLE)
        assert len(pattern.split(" ")) == expected, (
            "each alphanumeric character should contribute exactly one space-separated group"
        )

    def test_only_dots_dashes_and_spaces(self) -> None:
        pattern = encode_text("The quick brown fox 0123456789")
        assert set(pattern) <= {".", "-", " "}
        assert "  " not in pattern, "letters should be joined by a single space"

    def test_table_covers_alphabet_and_digits(self) -> None:
        assert len(MORSE_TABLE) == 36, "table should hold A-Z and 0-9"


# -----------------------------------------------------------------------
# encode_emotion
# -----------------------------------------------------------------------


class TestEncodeEmotion:
    @pytest.mark.parametrize(
        ("emotion", "word"),
        [
            (Emotion.HAPPINESS, "HAPPY"),
            (Emotion.SADNESS, "SAD"),
            (Emotion.ANGER, "ANGER"),
            (Emotion.FEAR, "FEAR"),
            (Emotion.SURPRISE, "SURPRISE"),
            (Emotion.DISGUST, "DISGUST"),
        ],
    )
    def test_table_spells_code_word(self, emotion: Emotion, word: str) -> None:
        assert EMOTION_MORSE[emotion] == encode_text(word), f"{emotion} should be signalled as {word}"

    def test_table_covers_taxonomy(self) -> None:
        assert set(EMOTION_MORSE) == set(Emotion)

    def test_case_insensitive(self) -> None:
        assert encode_emotion("Happiness") == encode_emotion("happiness") == ".... .- .--. .--. -.--"
        assert encode_emotion("SADNESS") == EMOTION_MORSE[Emotion.SADNESS]

    def test_accepts_enum_member(self) -> None:
        assert encode_emotion(Emotion.FEAR) == "..-. . .- .-."

    def test_unknown_emotion_falls_back_to_text(self) -> None:
        assert encode_emotion("calm") == encode_text("calm"), (
            "an emotion outside the taxonomy should be spelled out letter by letter"
        )

    def test_unmappable_unknown_emotion_is_empty(self) -> None:
        assert encode_emotion("???") == ""
