"""Tests for the element line parser."""

import pytest

from pdpug.element import ParsedElement, parse_attributes, parse_element, split_attributes


def test_plain_tag():
    assert parse_element("p", {}) == ParsedElement("p", "", "")


def test_tag_with_text():
    assert parse_element("h1   Hello world  ", {}) == ParsedElement("h1", "", "Hello world")


def test_default_tag_for_shorthand_only():
    el = parse_element(".card#main text", {})
    assert el.tag == "div"
    assert el.attrs == ' id="main" class="card"'
    assert el.text == "text"


def test_tag_allows_digits_dash_underscore():
    assert parse_element("h2", {}).tag == "h2"
    assert parse_element("my-widget_x", {}).tag == "my-widget_x"


def test_non_letter_start_defaults_to_div():
    el = parse_element("1abc", {})
    assert el.tag == "div"
    assert el.text == "1abc"


def test_last_id_wins():
    assert parse_element("p#a#b", {}).attrs == ' id="b"'


def test_duplicate_classes_are_kept():
    assert parse_element("p.x.x.y", {}).attrs == ' class="x x y"'


def test_id_and_class_come_before_paren_attrs():
    el = parse_element('a.btn(href="/x")#ignored', {})
    # Shorthands after the attribute list are inline text
    assert el.attrs == ' class="btn" href="/x"'
    assert el.text == "#ignored"


def test_nested_parentheses():
    el = parse_element('a(onclick="f(1)") go', {})
    assert el.attrs == ' onclick="f(1)"'
    assert el.text == "go"


def test_unbalanced_parentheses_drop_last_character():
    el = parse_element('a(href="x" hi', {})
    assert el.tag == "a"
    assert el.attrs == ' href="&quot;x&quot; h"'
    assert el.text == ""


def test_empty_attribute_list():
    assert parse_element("br()", {}) == ParsedElement("br", "", "")


class TestAttributes:
    def test_comma_separated(self):
        parts = parse_attributes('type="checkbox", checked, name=agree', {})
        assert parts == ['type="checkbox"', "checked", 'name="agree"']

    def test_space_separated_before_key(self):
        parts = parse_attributes("href='/' class=\"x\"", {})
        assert parts == ['href="/"', 'class="x"']

    def test_space_inside_value_does_not_split(self):
        parts = parse_attributes('title="hello world" data-x=1', {})
        assert parts == ['title="hello world"', 'data-x="1"']

    def test_keys_are_sanitized_and_empty_dropped(self):
        parts = parse_attributes("da@ta=1, !!!, =2, ok", {})
        assert parts == ['data="1"', "ok"]

    def test_values_are_interpolated_then_escaped(self):
        scope = {"slug": "x y", "t": 'a"b'}
        parts = parse_attributes('href="/r/#{slug}", title=!{t}', scope)
        assert parts == ['href="/r/x y"', 'title="a&quot;b"']

    def test_escaped_marker_is_raw_in_attributes(self):
        parts = parse_attributes("value=#{v}", {"v": "<i>"})
        assert parts == ['value="&lt;i&gt;"']

    def test_mismatched_quotes_are_kept(self):
        parts = parse_attributes("alt=\"x'", {})
        assert parts == ['alt="&quot;x&#039;"']

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("a=1,b=2", ["a=1", "b=2"]),
            ("a=1 ,  b=2", ["a=1", "b=2"]),
            ("a=1 b = 2", ["a=1", "b = 2"]),
            ("x y", ["x y"]),
            ("a, b", ["a", "b"]),
        ],
    )
    def test_split(self, raw, expected):
        assert split_attributes(raw) == expected


def test_attribute_parsing_never_raises():
    for line in ["a(", "a((", "a)", "a(,,,)", "a(=)", "#", ".", "a(x='')"]:
        parse_element(line, {})
