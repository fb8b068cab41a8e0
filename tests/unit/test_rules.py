"""Unit tests for the built-in validation rules and the rule registry."""

from dataclasses import dataclass

import pytest

from fieldrules.errors import ParamFormatError
from fieldrules.rules import rule_registry
from fieldrules.rules.common_rules import (
    contains,
    email,
    end_with,
    end_with_letter,
    excludes,
    in_list,
    length,
    maxlength,
    minlength,
    password,
    regex,
    required,
    start_with,
    start_with_letter,
    start_with_lower,
    start_with_upper,
    string_between,
    url,
)
from fieldrules.rules.file_rules import file_between, is_file, max_file_size, mimes, min_file_size
from fieldrules.rules.number_rules import between, integer, max_value, min_value, number


@dataclass
class FakeUpload:
    """Stands in for an UploadFile: name, MIME type and byte size."""

    filename: str
    content_type: str
    size: int


def _passes(outcome: dict) -> bool:
    assert set(outcome) == {"passes", "value"}
    return outcome["passes"]


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   ", [], {}])
    def test_blank_fails(self, value):
        assert not _passes(required(value))

    @pytest.mark.parametrize("value", ["x", 0, False, ["a"]])
    def test_present_passes(self, value):
        assert _passes(required(value))


class TestEmail:
    @pytest.mark.parametrize("value", [
        "test@example.com",
        "test123@example.co.uk",
        "test+123@example.net",
        "test.123@example.io",
        "test-123@example.info",
    ])
    def test_valid(self, value):
        assert _passes(email(value))

    @pytest.mark.parametrize("value", [
        "",
        "test@",
        "test@example",
        "test@example.",
        "test@.com",
        "test@..com",
        "test@example..com",
        "test@ex ample.com",
        None,
    ])
    def test_invalid(self, value):
        assert not _passes(email(value))


class TestLengthRules:
    def test_minlength(self):
        assert not _passes(minlength(None, "5"))
        assert not _passes(minlength("", "5"))
        assert not _passes(minlength("hello", "10"))
        assert _passes(minlength("hello", "5"))
        assert _passes(minlength("hello world", "5"))

    def test_maxlength(self):
        assert _passes(maxlength("hello", "10"))
        assert not _passes(maxlength("Long string", "5"))
        assert _passes(maxlength(None, "0"))

    def test_length(self):
        assert _passes(length(12345, "5"))
        assert _passes(length("abc", "3"))
        assert not _passes(length(None, "0"))
        assert not _passes(length(True, "0"))

    def test_length_bad_argument_raises(self):
        with pytest.raises(ParamFormatError, match="The length rule argument must be an integer"):
            length("hello", "invalid")

    def test_string_between(self):
        assert _passes(string_between("hello", "2, 5"))
        assert not _passes(string_between("hello", "6, 10"))


class TestUrl:
    @pytest.mark.parametrize("value", [
        "http://www.example.com",
        "https://www.example.com",
        "ftp://ftp.example.com",
    ])
    def test_valid(self, value):
        assert _passes(url(value))

    def test_missing_scheme(self):
        assert not _passes(url("example.com"))


class TestStartAndEnd:
    def test_start_with_upper(self):
        assert _passes(start_with_upper("Hello"))
        assert not _passes(start_with_upper("hello"))
        assert not _passes(start_with_upper(" test"))
        assert not _passes(start_with_upper(""))
        assert not _passes(start_with_upper(123))

    def test_start_with_lower(self):
        assert _passes(start_with_lower("hello"))
        assert not _passes(start_with_lower("Hello"))
        assert not _passes(start_with_lower("1"))
        assert not _passes(start_with_lower(None))

    def test_start_with_letter(self):
        assert _passes(start_with_letter("Hello"))
        assert not _passes(start_with_letter("1hello"))
        assert not _passes(start_with_letter("-test"))

    def test_end_with_letter(self):
        assert _passes(end_with_letter("Hello"))
        assert not _passes(end_with_letter("hello1"))
        assert not _passes(end_with_letter(""))
        assert not _passes(end_with_letter(True))

    def test_start_with(self):
        assert _passes(start_with("hello world", "hello"))
        assert not _passes(start_with("hello world", "world"))
        assert not _passes(start_with({"foo": "bar"}, "foo"))

    def test_end_with(self):
        assert _passes(end_with("hello world", "world"))
        assert _passes(end_with("hello world!", "!"))
        assert not _passes(end_with("hello world", "hello"))
        assert not _passes(end_with(123, "world"))


class TestContainsExcludes:
    def test_contains(self):
        assert _passes(contains("Hello, world!", "world"))
        assert _passes(contains("Hello, world!", "world,!"))
        assert not _passes(contains("Hello, world!", "world,Others"))
        assert not _passes(contains("", "foo"))
        assert not _passes(contains(42, "foo"))

    def test_excludes(self):
        assert _passes(excludes("Hello, world!", "sworld"))
        assert not _passes(excludes("Hello, world! foo", "foo"))

    def test_excludes_space_token(self):
        assert not _passes(excludes("Hello, world! foo", "&esp;"))
        assert _passes(excludes("", "&esp;"))

    def test_excludes_non_string_passes(self):
        assert _passes(excludes(42, "foo"))
        assert _passes(excludes(None, "foo"))


class TestMiscStringRules:
    def test_password(self):
        assert _passes(password("Abc12345@"))
        assert not _passes(password("Abc123@"))
        assert not _passes(password("abc12345@"))
        assert not _passes(password("ABC12345@"))
        assert not _passes(password("Abcdefgh@"))
        assert not _passes(password("Abc12345"))

    def test_in_list(self):
        assert _passes(in_list("fr", "en, fr"))
        assert not _passes(in_list("de", "en,fr"))
        assert _passes(in_list(["en", "fr"], "en,fr,de"))

    def test_regex_uses_whole_param(self):
        assert _passes(regex("ab,c", "^[a-z]+,[a-z]$"))
        assert not _passes(regex("abc1", "[a-z]+"))

    def test_regex_invalid_pattern(self):
        with pytest.raises(ParamFormatError) as exc:
            regex("abc", "(")
        assert exc.value.__cause__ is not None


class TestNumberRules:
    def test_number(self):
        assert _passes(number("12.5"))
        assert _passes(number(3))
        assert not _passes(number("abc"))
        assert not _passes(number(True))

    def test_integer(self):
        assert _passes(integer("12"))
        assert not _passes(integer("12.5"))

    def test_min_max(self):
        assert _passes(min_value("20", "18"))
        assert not _passes(min_value(17, "18"))
        assert _passes(max_value("10", "10"))
        assert not _passes(max_value("11", "10"))
        assert not _passes(max_value("eleven", "10"))

    def test_between_numbers(self):
        assert _passes(between("25", "18,30"))
        assert not _passes(between(31, "18,30"))

    def test_between_falls_back_to_string_length(self):
        assert _passes(between("hello", "2,5"))
        assert not _passes(between("hello world", "2,5"))

    def test_bad_param_raises_at_call_time(self):
        with pytest.raises(ParamFormatError):
            max_value("5", "ten")


class TestFileRules:
    def test_is_file(self):
        upload = FakeUpload("a.pdf", "application/pdf", 10)
        assert _passes(is_file(upload))
        assert _passes(is_file([upload, upload]))
        assert not _passes(is_file("a.pdf"))
        assert not _passes(is_file([]))

    def test_max_file_size(self):
        assert _passes(max_file_size(FakeUpload("a.pdf", "application/pdf", 1024), "1KB"))
        assert not _passes(max_file_size(FakeUpload("a.pdf", "application/pdf", 1025), "1KB"))
        assert not _passes(max_file_size(None, "1KB"))

    def test_min_file_size(self):
        assert _passes(min_file_size(FakeUpload("a.pdf", "application/pdf", 2048), "2KB"))
        assert not _passes(min_file_size(FakeUpload("a.pdf", "application/pdf", 10), "2KB"))

    def test_file_between(self):
        upload = FakeUpload("a.pdf", "application/pdf", 2 * 1024 ** 2)
        assert _passes(file_between(upload, "1MB,5MB"))
        assert not _passes(file_between(upload, "3MB, 5MB"))

    def test_bad_size_unit_raises(self):
        with pytest.raises(ParamFormatError):
            max_file_size(FakeUpload("a.pdf", "application/pdf", 10), "1XB")

    def test_mimes(self):
        pdf = FakeUpload("report.pdf", "application/pdf", 10)
        png = FakeUpload("photo.png", "image/png", 10)
        assert _passes(mimes(pdf, ".pdf"))
        assert _passes(mimes(png, "image/*"))
        assert _passes(mimes(png, "*.png"))
        assert _passes(mimes([pdf, png], "application/pdf, image/*"))
        assert not _passes(mimes(png, "application/pdf"))

    def test_mimes_requires_argument(self):
        with pytest.raises(ParamFormatError):
            mimes(FakeUpload("a.pdf", "application/pdf", 10), "")


class TestRuleRegistry:
    def test_builtin_lookup(self):
        assert rule_registry.get_rule("required") is required
        assert rule_registry.get_rule("maxFileSize") is max_file_size

    def test_miss_returns_none(self):
        assert rule_registry.get_rule("doesNotExist") is None

    def test_register_and_decorator(self, monkeypatch):
        monkeypatch.setattr(rule_registry, "RULE_REGISTRY", dict(rule_registry.RULE_REGISTRY))

        @rule_registry.rule("even")
        def even(value, param=None):
            return {"passes": int(value) % 2 == 0, "value": value}

        assert rule_registry.get_rule("even") is even
        assert "even" in rule_registry.list_rule_names()
