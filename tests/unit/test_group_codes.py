"""Unit tests for group join codes."""

import re

import pytest

from app.modules.groups.codes import GroupCodeExhaustedError, generate_group_code, generate_unique_code

CODE_RE = re.compile(r"^[A-Z0-9]{6}$")


def test_code_shape():
    for _ in range(200):
        assert CODE_RE.match(generate_group_code())


def test_custom_length():
    assert len(generate_group_code(8)) == 8


def test_unique_code_retries_past_collisions():
    seen = []

    def exists(code):
        seen.append(code)
        return len(seen) < 3

    code = generate_unique_code(exists, max_attempts=5)
    assert len(seen) == 3
    assert code == seen[-1]


def test_reserved_codes_skipped(monkeypatch):
    codes = iter(["AAAAAA", "BBBBBB"])
    monkeypatch.setattr("app.modules.groups.codes.generate_group_code", lambda length=6: next(codes))
    assert generate_unique_code(lambda c: False, reserved={"AAAAAA"}) == "BBBBBB"


def test_gives_up_after_max_attempts():
    with pytest.raises(GroupCodeExhaustedError):
        generate_unique_code(lambda c: True, max_attempts=3)
