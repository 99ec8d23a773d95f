"""
Tests for app/utils/phone.py - normalization, code shape, masking.
"""
import pytest

from app.utils.phone import is_valid_code, mask_phone, normalize_phone


class TestNormalizePhone:
    def test_canonical_form_is_unchanged(self):
        assert normalize_phone("+5511987654321") == "+5511987654321"

    def test_normalizing_twice_is_stable(self):
        once = normalize_phone("(21) 3333-4444")
        assert normalize_phone(once) == once

    @pytest.mark.parametrize("local", ["11987654321", "21998765432", "85912345678"])
    def test_eleven_digit_local_number_gets_country_code(self, local):
        assert normalize_phone(local) == "+55" + local

    def test_ten_digit_landline_gets_country_code(self):
        assert normalize_phone("1133334444") == "+551133334444"

    def test_nine_digit_number_assumes_sao_paulo(self):
        assert normalize_phone("987654321") == "+5511987654321"

    def test_leading_trunk_zero_is_dropped(self):
        assert normalize_phone("011987654321") == normalize_phone("11987654321")

    def test_trunk_zero_before_country_code(self):
        assert normalize_phone("05511987654321") == "+5511987654321"

    def test_formatted_input(self):
        assert normalize_phone("(11) 98765-4321") == "+5511987654321"

    def test_form_mask_format(self):
        assert normalize_phone("+5511-98765-4321") == "+5511987654321"

    def test_other_lengths_get_country_code_anyway(self):
        assert normalize_phone("12345") == "+5512345"

    def test_empty_input_does_not_raise(self):
        assert normalize_phone("") == "+55"
        assert normalize_phone(None) == "+55"

    def test_letters_only(self):
        assert normalize_phone("not a phone") == "+55"

    def test_non_ascii_digits_are_stripped(self):
        result = normalize_phone("١١٩٨٧٦٥٤٣٢١")
        assert result == "+55"
        assert result[1:].isascii()

    def test_non_ascii_digits_mixed_with_ascii(self):
        assert normalize_phone("(11) 98765-4321 ٣") == "+5511987654321"

    def test_area_code_55_is_taken_as_country_code(self):
        # Rio Grande do Sul numbers already look like they carry +55
        assert normalize_phone("55991234567") == "+55991234567"


class TestIsValidCode:
    def test_six_digits(self):
        assert is_valid_code("123456") is True

    @pytest.mark.parametrize("code", ["12345", "1234567", "12a456", "", " 123456", "123456\n", "12 456"])
    def test_wrong_shape(self, code):
        assert is_valid_code(code) is False

    def test_non_ascii_digits(self):
        assert is_valid_code("١٢٣٤٥٦") is False

    def test_non_string(self):
        assert is_valid_code(123456) is False
        assert is_valid_code(None) is False


class TestMaskPhone:
    def test_hides_subscriber_number(self):
        assert mask_phone("+5511987654321") == "+5511*******21"

    def test_short_value_fully_masked(self):
        assert mask_phone("+55123") == "******"

    def test_empty(self):
        assert mask_phone("") == ""
