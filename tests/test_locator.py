"""Tests for locator parsing and per-action XPath compilation."""

import lxml.html
import pytest

from browser_session.errors import InvalidLocator
from browser_session.locator import (
    ActionKind,
    Locator,
    LocatorKind,
    compile_locator,
    to_xpath,
    xpath_literal,
)

EXPECTED_COUNTS = {
    ActionKind.LINK: 3,
    ActionKind.BUTTON: 6,
    ActionKind.LINK_OR_BUTTON: 9,
    ActionKind.FIELD: 3,
    ActionKind.RADIO: 3,
    ActionKind.CHECKBOX: 3,
    ActionKind.OPTION: 1,
    ActionKind.FILE_FIELD: 3,
    ActionKind.SELECT_FIELD: 3,
}

PAGE = lxml.html.document_fromstring("""
<html><body>
  <a href="/x" title="Go">Login</a>
  <form>
    <label for="email">Email</label><input type="text" id="email" name="email">
    <label><input type="checkbox" name="remember"> Remember me</label>
    <select name="country"><option>France</option><option>Japan</option></select>
    <input type="submit" value="Save">
  </form>
</body></html>
""")


class TestLocatorParse:

    @pytest.mark.parametrize("raw, kind", [
        ("#email", LocatorKind.ID),
        ("//a", LocatorKind.XPATH),
        ("/html/body", LocatorKind.XPATH),
        (".//input", LocatorKind.XPATH),
        ("(//a)[2]", LocatorKind.XPATH),
        ("Login", LocatorKind.FUZZY),
        ("Sign #1", LocatorKind.FUZZY),
    ])
    def test_kind_detection(self, raw, kind):
        assert Locator.parse(raw).kind is kind

    def test_parse_is_idempotent(self):
        loc = Locator.parse("#a")
        assert Locator.parse(loc) is loc

    def test_id_text_strips_marker(self):
        assert Locator.parse("#email").text == "email"

    @pytest.mark.parametrize("bad", ["", "   ", "#", None, 42])
    def test_invalid_locators(self, bad):
        with pytest.raises(InvalidLocator):
            Locator.parse(bad)


@pytest.mark.parametrize("kind", list(ActionKind))
def test_identifier_compiles_to_single_equality_query(kind):
    assert compile_locator("#submit", kind) == ["//*[@id='submit']"]


@pytest.mark.parametrize("kind", list(ActionKind))
def test_path_expression_is_used_verbatim(kind):
    query = "//div[@class='nav']//a[2]"
    assert compile_locator(query, kind) == [query]


@pytest.mark.parametrize("kind, count", sorted(EXPECTED_COUNTS.items(), key=lambda kv: kv[0].value))
def test_fuzzy_alternative_counts(kind, count):
    assert len(compile_locator("Login", kind)) == count


def test_link_alternatives_in_priority_order():
    assert compile_locator("Login", ActionKind.LINK) == [
        "//a[normalize-space(.)='Login']",
        "//a[@title='Login']",
        "//a//img[@alt='Login']",
    ]


def test_link_or_button_is_links_then_buttons():
    combined = compile_locator("Go", ActionKind.LINK_OR_BUTTON)
    assert combined == compile_locator("Go", ActionKind.LINK) + compile_locator("Go", ActionKind.BUTTON)


def test_button_alternatives_cover_value_title_text_and_image_alt():
    queries = compile_locator("Save", ActionKind.BUTTON)
    assert "@value='Save'" in queries[0]
    assert "@title='Save'" in queries[1]
    assert queries[4] == "//button[normalize-space(.)='Save']"
    assert queries[5] == "//input[@type='image' and @alt='Save']"


class TestXPathLiteral:

    def test_plain(self):
        assert xpath_literal("abc") == "'abc'"

    def test_single_quote(self):
        assert xpath_literal("it's") == "\"it's\""

    def test_both_quotes(self):
        assert xpath_literal("a'b\"c") == "concat('a', \"'\", 'b\"c')"

    def test_both_quotes_evaluates(self):
        text = "a'b\"c"
        doc = lxml.html.fromstring(f"<div><a>{text}</a></div>")
        assert len(doc.xpath("//a[.=" + xpath_literal(text) + "]")) == 1


class TestToXPath:

    def test_identifier(self):
        assert to_xpath("#email") == "//*[@id='email']"

    def test_path(self):
        assert to_xpath("//input") == "//input"

    def test_fuzzy_matches_id_or_name(self):
        assert to_xpath("email") == "//*[@id='email' or @name='email']"


@pytest.mark.parametrize("kind", list(ActionKind))
def test_compiled_queries_are_valid_xpath(kind):
    for query in compile_locator("It's \"quoted\"", kind):
        PAGE.xpath(query)


def test_queries_match_expected_elements():
    def first(locator, kind):
        for query in compile_locator(locator, kind):
            found = PAGE.xpath(query)
            if found:
                return found[0]
        return None

    assert first("Login", ActionKind.LINK).get("href") == "/x"
    assert first("Go", ActionKind.LINK).text == "Login"
    assert first("Email", ActionKind.FIELD).get("id") == "email"
    assert first("Remember me", ActionKind.CHECKBOX).get("name") == "remember"
    assert first("Japan", ActionKind.OPTION).text == "Japan"
    assert first("Save", ActionKind.BUTTON).get("type") == "submit"
    assert first("country", ActionKind.SELECT_FIELD).tag == "select"
    assert first("Email", ActionKind.LINK) is None


def test_unknown_kind_rejected():
    with pytest.raises(InvalidLocator):
        compile_locator("Login", "link")
