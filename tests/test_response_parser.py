"""Tests for the labeled-section response parser and emotion normalisation."""

from __future__ import annotations

import time

import pytest

from vision_assist.models.enums import Emotion
from vision_assist.services.response_parser import (
    EMOTION_SYNONYMS,
    normalize_emotion,
    parse,
    parse_emotions,
)


# -----------------------------------------------------------------------
# parse
# -----------------------------------------------------------------------


class TestParse:
    def test_fully_labeled_response(self) -> None:
        parsed = parse("Description: A door. Objects: door, chair. Hazards: none. Emotions: happy, angry")
        assert parsed.description == "A door"
        assert parsed.objects == ("door", "chair")
        assert parsed.hazards == ("none",)
        assert parsed.emotions == (Emotion.HAPPINESS, Emotion.ANGER), "emotions should keep input order"

    def test_unlabeled_text_uses_defaults(self) -> None:
        parsed = parse("just some text")
        assert parsed.description == "just some text", "description should default to the raw text"
        assert parsed.objects == ()
        assert parsed.hazards == ()
        assert parsed.emotions == ()

    def test_empty_string(self) -> None:
        parsed = parse("")
        assert parsed.description == ""
        assert parsed.objects == parsed.hazards == parsed.emotions == ()

    def test_labels_are_case_insensitive(self) -> None:
        parsed = parse("DESCRIPTION: a hallway. objects: lamp. HAZARDS: stairs")
        assert parsed.description == "a hallway"
        assert parsed.objects == ("lamp",)
        assert parsed.hazards == ("stairs",)

    def test_sections_on_separate_lines(self) -> None:
        raw = (
            "Description: A kitchen with a table.\n"
            "Objects: table (center); kettle (left)\n"
            "Hazards: hot stove on the right\n"
            "Emotions: none"
        )
        parsed = parse(raw)
        assert parsed.description == "A kitchen with a table"
        assert parsed.objects == ("table (center)", "kettle (left)"), "semicolons should split items too"
        assert parsed.hazards == ("hot stove on the right",)
        assert parsed.emotions == (), "'none' is not an emotion and should be dropped"

    def test_missing_sections_default_independently(self) -> None:
        parsed = parse("Description: An empty park. Hazards: wet grass")
        assert parsed.description == "An empty park"
        assert parsed.objects == ()
        assert parsed.hazards == ("wet grass",)
        assert parsed.emotions == ()

    def test_lists_without_description(self) -> None:
        raw = "Objects: cup, plate"
        parsed = parse(raw)
        assert parsed.description == raw, "without a Description label the whole text is the description"
        assert parsed.objects == ("cup", "plate")

    def test_empty_description_falls_back_to_raw_text(self) -> None:
        raw = "Description: . Objects: sign"
        assert parse(raw).description == raw

    def test_duplicate_objects_retained(self) -> None:
        parsed = parse("Objects: chair, chair, , table ,chair")
        assert parsed.objects == ("chair", "chair", "table", "chair"), (
            "objects keep repeats and order, dropping only empty pieces"
        )

    def test_abbreviation_inside_description(self) -> None:
        parsed = parse("Description: Dr. Lee waves at you. Objects: hand")
        assert parsed.description == "Dr. Lee waves at you"

    def test_trailing_period_stripped_from_last_section(self) -> None:
        assert parse("Emotions: sad.").emotions == (Emotion.SADNESS,)

    def test_first_label_occurrence_wins(self) -> None:
        parsed = parse("Hazards: curb. Hazards: puddle")
        assert parsed.hazards == ("curb",)

    def test_label_word_inside_text_splits_section(self) -> None:
        # Known limitation: a label followed by a colon always starts a section.
        parsed = parse("Description: A sign that reads Hazards: wet floor. Objects: sign")
        assert parsed.description == "A sign that reads"
        assert parsed.hazards == ("wet floor",)
        assert parsed.objects == ("sign",)

    @pytest.mark.parametrize("filler", [" ", "\n"])
    def test_long_whitespace_run_parses_quickly(self, filler: str) -> None:
        raw = "Objects: a" + filler * 10_000 + "b, c" + filler * 10_000 + ". Emotions: fear" + filler * 10_000
        start = time.perf_counter()
        parsed = parse(raw)
        elapsed = time.perf_counter() - start
        assert parsed.objects == ("a" + filler * 10_000 + "b", "c")
        assert parsed.emotions == (Emotion.FEAR,)
        assert elapsed < 1.0, f"parsing long whitespace took {elapsed:.2f}s"

    @pytest.mark.parametrize(
        "raw",
        ["Emotions:",":::", "Objects: ,;,;", "Description:\n\n", "Emotions: 😀, ☂", "Hazards" * 50],
    )
    def test_never_raises(self, raw: str) -> None:
        parsed = parse(raw)
        assert isinstance(parsed.description, str)


# -----------------------------------------------------------------------
# Emotion normalisation
# -----------------------------------------------------------------------


class TestNormalizeEmotion:
    @pytest.mark.parametrize("emotion", list(Emotion))
    def test_canonical_names_are_fixed_points(self, emotion: Emotion) -> None:
        assert normalize_emotion(emotion.value) is emotion
        assert normalize_emotion(normalize_emotion(emotion.value)) is emotion, "normalisation is idempotent"

    @pytest.mark.parametrize(("token", "expected"), list(EMOTION_SYNONYMS.items()))
    def test_synonyms(self, token: str, expected: Emotion) -> None:
        assert normalize_emotion(token) is expected

    def test_containment_in_both_directions(self) -> None:
        assert normalize_emotion("sad") is Emotion.SADNESS, "token contained in a canonical name"
        assert normalize_emotion("deep sadness") is Emotion.SADNESS, "token containing a canonical name"

    def test_containment_is_permissive(self) -> None:
        # Documented edge case: substring matching accepts inflected or unrelated words.
        assert normalize_emotion("angered") is Emotion.ANGER
        assert normalize_emotion("fearless") is Emotion.FEAR

    def test_case_and_whitespace_ignored(self) -> None:
        assert normalize_emotion("  Surprised ") is Emotion.SURPRISE

    @pytest.mark.parametrize("token", ["neutral", "calm", "none", "", "   "])
    def test_unknown_tokens_dropped(self, token: str) -> None:
        assert normalize_emotion(token) is None


class TestParseEmotions:
    def test_synonyms_collapse_to_one_entry(self) -> None:
        assert parse_emotions("happy, joyful, happiness") == (Emotion.HAPPINESS,)

    def test_first_occurrence_order(self) -> None:
        assert parse_emotions("fear; happy; scared; disgusted; joy") == (
            Emotion.FEAR,
            Emotion.HAPPINESS,
            Emotion.DISGUST,
        )

    def test_unknowns_dropped(self) -> None:
        assert parse_emotions("neutral, shocked, calm") == (Emotion.SURPRISE,)

    def test_empty_content(self) -> None:
        assert parse_emotions("") == ()
        assert parse_emotions(None) == ()
