"""Tests for plate normalization and OCR text extraction."""

import pytest

from app.errors import InvalidPlate
from app.services.plates import extract_plate, format_plate, is_valid_plate, normalize_plate


class TestNormalizePlate:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1234567", "12-345-67"),
            ("12-345-67", "12-345-67"),
            (" 12 345 67 ", "12-345-67"),
            ("12345678", "123-45-678"),
            ("123-45-678", "123-45-678"),
            ("IL 123.45.678", "123-45-678"),
        ],
    )
    def test_valid_plates(self, raw, expected):
        assert normalize_plate(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "123456", "123456789", "12-34-5", "1-2-3-4-5-6-7-8-9"])
    def test_wrong_digit_count_rejected(self, raw):
        with pytest.raises(InvalidPlate):
            normalize_plate(raw)

    @pytest.mark.parametrize("raw", ["1234567", "12-345-67", "12345678", "x123x45x678x"])
    def test_idempotent(self, raw):
        once = normalize_plate(raw)
        assert normalize_plate(once) == once

    def test_every_digit_keeps_its_position(self):
        assert normalize_plate("9876543") == "98-765-43"
        assert normalize_plate("98765432") == "987-65-432"

    def test_format_plate_rejects_other_lengths(self):
        with pytest.raises(InvalidPlate):
            format_plate("123")

    def test_is_valid_plate(self):
        assert is_valid_plate("12-345-67")
        assert not is_valid_plate("12-345")


class TestExtractPlate:
    def test_dashed_seven_digit_plate(self):
        assert extract_plate("ISRAEL\n12-345-67\n") == ("12-345-67", 0.85)

    def test_undashed_seven_digit_plate(self):
        assert extract_plate("plate 1234567 here") == ("12-345-67", 0.85)

    def test_eight_digit_plate(self):
        assert extract_plate("IL 123-45-678") == ("123-45-678", 0.85)

    def test_undashed_eight_digit_plate_not_cut_to_seven(self):
        assert extract_plate("12345678") == ("123-45-678", 0.85)

    def test_scattered_digits_fall_back(self):
        plate, confidence = extract_plate("12 34 56 7 9")
        assert plate == "12-345-67"
        assert confidence == 0.4

    def test_too_few_digits(self):
        assert extract_plate("AB 12 C3") == ("123", 0.2)

    def test_no_text(self):
        assert extract_plate("") == ("", 0.2)
