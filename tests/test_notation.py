from __future__ import annotations

from textwrap import dedent

import pytest

from tests.support.harness import (
    PatternSyntaxError,
    W,
    match,
    parse_pattern,
)

SCENARIOS = [
    pytest.param("42", 42, id="int"),
    pytest.param("-7", -7, id="negative-int"),
    pytest.param("2.5", 2.5, id="float"),
    pytest.param("1e3", 1000.0, id="exponent"),
    pytest.param('"hi there"', "hi there", id="double-quoted"),
    pytest.param("'it\\'s'", "it's", id="single-quoted-escape"),
    pytest.param('"tab\\tend"', "tab\tend", id="escape-sequence"),
    pytest.param("true", True, id="true"),
    pytest.param("False", False, id="false-python"),
    pytest.param("nil", None, id="nil"),
    pytest.param("null", None, id="null"),
    pytest.param("trueish", "trueish", id="name-with-keyword-prefix"),
    pytest.param("_", W, id="wildcard"),
    pytest.param(":db/ident", "db/ident", id="keyword"),
    pytest.param("people", "people", id="bare-name"),
    pytest.param("[1 2 3]", [1, 2, 3], id="vector-whitespace"),
    pytest.param("[1, 2, 3]", [1, 2, 3], id="vector-commas"),
    pytest.param("(1 _)", (1, W), id="tuple"),
    pytest.param("[]", [], id="empty-vector"),
    pytest.param("()", (), id="empty-tuple"),
    pytest.param("{}", {}, id="empty-map"),
    pytest.param("#{}", frozenset(), id="empty-set"),
    pytest.param("#{1 _}", frozenset({1, W}), id="set"),
    pytest.param('{"a": 1, "b": _}', {"a": 1, "b": W}, id="map-json-style"),
    pytest.param('{"a":true}', {"a": True}, id="map-glued-colon"),
    pytest.param("{a:b}", {"a": "b"}, id="map-glued-names"),
    pytest.param("{:a 1 :b [2 _]}", {"a": 1, "b": [2, W]}, id="map-edn-style"),
    pytest.param("{(1 2) x}", {(1, 2): "x"}, id="map-tuple-key"),
    pytest.param("#{(1 _) #{2}}", frozenset({(1, W), frozenset({2})}), id="set-nested"),
    pytest.param(
        dedent(
            """\
            ; partition pattern
            {:db/id                 [:db.part/db _]
             :db.install/_partition :db.part/db
             :db/ident              :people}
        """
        ),
        {"db/id": ["db.part/db", W], "db.install/_partition": "db.part/db", "db/ident": "people"},
        id="multiline-with-comment",
    ),
]


@pytest.mark.parametrize("source, expected", SCENARIOS)
def test_parse_pattern(source: str, expected) -> None:
    result = parse_pattern(source)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    "source",
    [
        pytest.param("[1 2", id="unclosed-vector"),
        pytest.param("{1}", id="odd-map"),
        pytest.param("#{[1]}", id="unhashable-set-element"),
        pytest.param("{[1] 2}", id="unhashable-map-key"),
        pytest.param("#{1 1}", id="duplicate-set-element"),
        pytest.param("{:a 1 :a 2}", id="duplicate-map-key"),
        pytest.param("_x", id="underscore-name"),
        pytest.param("", id="empty"),
        pytest.param("@", id="bad-character"),
    ],
)
def test_parse_pattern_rejects(source: str) -> None:
    with pytest.raises(PatternSyntaxError):
        parse_pattern(source)


def test_syntax_error_reports_position() -> None:
    with pytest.raises(PatternSyntaxError) as exc_info:
        parse_pattern("[1\n  @]")

    err = exc_info.value
    assert err.line == 2
    assert err.column == 3
    assert "line 2" in str(err)


def test_non_string_source_rejected() -> None:
    with pytest.raises(PatternSyntaxError):
        parse_pattern(b"[1]")  # type: ignore[arg-type]


def test_parsed_pattern_matches_record() -> None:
    pattern = parse_pattern("{:person/name \"dilbert\" :job/type _ :db/id _}")
    value = {"db/id": ("db.part/user", -1000003), "person/name": "dilbert", "job/type": "sucky"}
    assert match(pattern, value) is True
    assert match(pattern, {**value, "extra": 1}) is False
