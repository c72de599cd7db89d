"""
Tests for AsciiDoc block attribute list parsing
"""
from adoc.adoc_attribute_list import AdocAttributeList


class TestAdocAttributeList:
    """Tests for the AdocAttributeList class."""

    def test_positional(self):
        """Test positional attributes and the style they imply."""
        assert AdocAttributeList.parse("source,ruby") == {"1": "source", "style": "source", "2": "ruby"}

    def test_named_and_options(self):
        """Test named attributes and an options list."""
        attributes = AdocAttributeList.parse('cols="1,2",options="header"')
        assert attributes == {"cols": "1,2", "options": "header", "header-option": ""}

    def test_quoted_id(self):
        """Test a single-quoted named value."""
        assert AdocAttributeList.parse("id='top'") == {"id": "top"}

    def test_shorthands(self):
        """Test id, role and option shorthands on the first positional entry."""
        attributes = AdocAttributeList.parse("#intro.lead.big%collapsible")
        assert attributes["id"] == "intro"
        assert attributes["role"] == "lead big"
        assert attributes["options"] == "collapsible"
        assert attributes["collapsible-option"] == ""
        assert "style" not in attributes

    def test_style_with_shorthand(self):
        """Test a style followed by a role."""
        attributes = AdocAttributeList.parse("quote.fancy, Abraham Lincoln")
        assert attributes["style"] == "quote"
        assert attributes["role"] == "fancy"
        assert attributes["2"] == "Abraham Lincoln"

    def test_empty(self):
        """Test an empty attribute list."""
        assert not AdocAttributeList.parse("")

    def test_split_entries_respects_quotes(self):
        """Test that commas inside quotes do not split entries."""
        assert AdocAttributeList.split_entries('a, "b,c", d') == ["a", '"b,c"', "d"]
        assert AdocAttributeList.split_entries("a,") == ["a", ""]

    def test_unquote(self):
        """Test removing one level of quotes."""
        assert AdocAttributeList.unquote("'x'") == "x"
        assert AdocAttributeList.unquote('"x"') == "x"
        assert AdocAttributeList.unquote("'x\"") == "'x\""
