# tests/services/test_answer_validation.py
"""Tests for answer body, rating and answer-data validation."""

import pytest

from secret_game.services.errors import InvalidAnswerError, InvalidRatingError
from secret_game.services.validation import (
    AnswerContext,
    count_words,
    limits_for,
    parse_answer_data,
    validate_body,
    validate_rating,
    validate_ratings,
)


def _words(n: int) -> str:
    return " ".join(["word"] * n)


class TestValidateBody:
    def test_trims_and_returns_body(self):
        assert validate_body("  hello there  ") == "hello there"

    def test_hundred_words_is_accepted(self):
        assert count_words(validate_body(_words(100))) == 100

    def test_hundred_and_one_words_is_rejected(self):
        with pytest.raises(InvalidAnswerError) as exc_info:
            validate_body(_words(101))
        assert exc_info.value.message == "Secret must be 100 words or less"

    @pytest.mark.parametrize("body", ["", "   ", "\n\t", None])
    def test_empty_body_is_rejected(self, body):
        with pytest.raises(InvalidAnswerError) as exc_info:
            validate_body(body)
        assert exc_info.value.message == "Secret cannot be empty"

    def test_non_text_answers_are_limited_by_characters(self):
        # 150 short words would break the word cap but fit in 500 characters.
        body = " ".join(["a"] * 150)
        assert validate_body(body, "slider") == body

        with pytest.raises(InvalidAnswerError) as exc_info:
            validate_body("x" * 501, "slider")
        assert exc_info.value.message == "Answer must be 500 characters or less"

    def test_quick_context_uses_character_limit(self):
        assert limits_for("text", AnswerContext.QUICK).max_chars == 500
        assert validate_body(" ".join(["a"] * 120), context=AnswerContext.QUICK)
        with pytest.raises(InvalidAnswerError):
            validate_body("y" * 501, context=AnswerContext.QUICK)

    def test_quick_context_rejects_blank_answer(self):
        with pytest.raises(InvalidAnswerError) as exc_info:
            validate_body("  ", context=AnswerContext.QUICK)
        assert exc_info.value.message == "Answer is required"


class TestValidateRatings:
    @pytest.mark.parametrize("value", [1, 3, 5])
    def test_in_range(self, value):
        validate_ratings(value, value)
        validate_rating(value)

    @pytest.mark.parametrize("value", [0, 6, -1, 2.5, "3", True, None])
    def test_out_of_range_or_wrong_type(self, value):
        with pytest.raises(InvalidRatingError):
            validate_ratings(value, 3)
        with pytest.raises(InvalidRatingError):
            validate_ratings(3, value)
        with pytest.raises(InvalidRatingError):
            validate_rating(value)


class TestParseAnswerData:
    def test_text_without_payload(self):
        assert parse_answer_data("text", None) is None

    def test_slider_payload_gets_type_filled_in(self):
        data = parse_answer_data("slider", {"value": 7})
        assert data.type == "slider"
        assert data.value == 7.0

    def test_multiple_choice_with_explicit_type(self):
        data = parse_answer_data("multipleChoice", {"type": "multipleChoice", "selected": ["a", "b"]})
        assert data.selected == ["a", "b"]

    def test_multiple_choice_requires_a_selection(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_data("multipleChoice", {"selected": []})

    def test_image_upload_checks_mime_type(self):
        with pytest.raises(InvalidAnswerError) as exc_info:
            parse_answer_data(
                "imageUpload", {"imageBase64": "aGVsbG8=", "mimeType": "image/bmp"}
            )
        assert "Unsupported image format" in exc_info.value.message

    def test_image_upload_checks_file_size(self):
        with pytest.raises(InvalidAnswerError) as exc_info:
            parse_answer_data(
                "imageUpload",
                {"imageBase64": "aGVsbG8=", "mimeType": "image/png", "fileSize": 6 * 1024 * 1024},
            )
        assert exc_info.value.message == "Image must be under 5MB"

    def test_image_upload_snake_case_input(self):
        data = parse_answer_data(
            "imageUpload", {"image_base64": "aGVsbG8=", "mime_type": "image/png", "caption": "me"}
        )
        assert data.image_base64 == "aGVsbG8="
        assert data.caption == "me"

    def test_mismatched_type_is_rejected(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_data("slider", {"type": "text", "text": "hi"})

    def test_unknown_answer_type_is_rejected(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_data("video", None)

    def test_non_text_answer_requires_payload(self):
        with pytest.raises(InvalidAnswerError):
            parse_answer_data("slider", None)
