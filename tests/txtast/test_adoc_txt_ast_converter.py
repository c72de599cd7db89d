"""
Tests for the AsciiDoc to text AST converter
"""
import os
import pytest

from adoc.adoc_element import AdocAdmonition, AdocDocument
from txtast.adoc_txt_ast_converter import AdocTxtASTConverter, parse
from txtast.converter_config import AdocConverterConfig
from txtast.txt_ast_errors import AdocInvalidAdmonitionError
from txtast.txt_ast_node import TxtASTCodeBlockNode, TxtASTDocumentNode
from txtast.txt_ast_serializer import serialize
from txtast.txt_ast_validator import TxtASTValidator

from txt_ast_test_utils import (
    child_types,
    find_nodes,
    find_test_files,
    parse_and_compare,
    span,
    str_nodes
)


@pytest.fixture
def converter():
    """Fixture providing a converter with the default configuration."""
    return AdocTxtASTConverter()


def convert_and_validate(text, config=None):
    """Convert text and check the result against the structural rules."""
    tree = parse(text, config)
    TxtASTValidator(text).validate(tree)
    return tree


class TestFixtures:
    """Tests against stored expected trees."""

    @pytest.mark.parametrize("adoc_path,expected_json_path", find_test_files())
    def test_parse_fixture_files(self, adoc_path, expected_json_path):
        """Test converting AsciiDoc files against expected JSON outputs."""
        is_match, diff = parse_and_compare(adoc_path, expected_json_path)
        assert is_match, f"AST mismatch for {os.path.basename(adoc_path)}:\n{diff}"


class TestDocument:
    """Tests for whole documents and their headers."""

    def test_empty_document(self, converter):
        """Test that empty input gives the canonical empty document."""
        doc = converter.convert("")
        assert isinstance(doc, TxtASTDocumentNode)
        assert doc.children == []
        assert doc.raw == ""
        assert doc.range == (0, 0)
        assert span(doc) == (1, 0, 1, 0)

    def test_comment_only_document(self):
        """Test that a document with nothing to locate is the empty document."""
        doc = convert_and_validate("// just a comment\n")
        assert doc.children == []
        assert doc.range == (0, 0)

    def test_single_word(self):
        """Test the smallest non-empty document."""
        doc = convert_and_validate("text")
        assert child_types(doc) == ["Paragraph"]

        paragraph = doc.children[0]
        assert child_types(paragraph) == ["Str"]
        text = paragraph.children[0]
        assert text.value == "text"
        assert text.range == (0, 4)
        assert span(text) == (1, 0, 1, 4)
        assert doc.range == (0, 4)
        assert doc.raw == "text"

    def test_multiline_paragraph(self):
        """Test that a paragraph spanning two lines is one Str."""
        doc = convert_and_validate("text\ntext\n")
        texts = str_nodes(doc)
        assert len(texts) == 1
        assert texts[0].value == "text\ntext"
        assert texts[0].range == (0, 9)
        assert span(texts[0]) == (1, 0, 2, 4)

    def test_header_with_id_after_comment(self):
        """Test the document title and its id when preceded by a comment."""
        text = "// Comment.\n\n[id='top-level-heading']\n= Top-level heading\n\ntext\n"
        doc = convert_and_validate(text)
        assert child_types(doc) == ["ID", "Header", "Paragraph"]

        id_node = doc.children[0]
        assert id_node.raw == "top-level-heading"
        assert span(id_node) == (3, 5, 3, 22)
        assert id_node.range == (18, 35)

        header = doc.children[1]
        assert header.depth == 1
        title = header.children[0]
        assert title.value == "Top-level heading"
        assert span(title) == (4, 2, 4, 19)
        assert title.range == (40, 57)

    def test_header_id_on_first_line(self):
        """Test an id on the very first line of the document."""
        doc = convert_and_validate("[id='x']\n= Title\n")
        assert child_types(doc) == ["ID", "Header"]
        assert span(doc.children[0]) == (1, 5, 1, 6)
        assert span(doc.children[1]) == (2, 2, 2, 7)

    def test_document_raw_is_covered_source(self):
        """Test that the document's raw text is the source it covers."""
        text = "= Title\n\nHello world.\n"
        doc = convert_and_validate(text)
        assert doc.raw == text[doc.range[0]:doc.range[1]]
        assert doc.raw == "Title\n\nHello world."

    def test_authors(self):
        """Test that the author line produces Author nodes."""
        doc = convert_and_validate("= Title\nDoc Writer <doc@example.com>\n")
        assert child_types(doc) == ["Header", "Author"]

        author = doc.children[1]
        assert child_types(author) == ["AuthorName", "AuthorEmail"]
        assert span(author.children[0]) == (2, 0, 2, 10)
        assert span(author.children[1]) == (2, 12, 2, 27)

    def test_several_authors_on_one_line(self):
        """Test that authors sharing a line resolve to their own names."""
        doc = convert_and_validate("= Title\nAnn Lee <ann@example.com>; Bo Chen\n")
        authors = find_nodes(doc, "Author")
        assert len(authors) == 2
        assert authors[1].children[0].raw == "Bo Chen"
        assert authors[1].loc.start.column > authors[0].loc.end.column

    def test_authors_disabled(self):
        """Test that authors can be switched off."""
        config = AdocConverterConfig(include_authors=False)
        doc = convert_and_validate("= Title\nDoc Writer <doc@example.com>\n", config)
        assert child_types(doc) == ["Header"]

    def test_conversion_is_idempotent(self):
        """Test that converting the same text twice gives equal trees."""
        text = "= Title\n\n* one\n* two\n\n|===\n|a|b\n|===\n"
        assert serialize(parse(text)) == serialize(parse(text))

    def test_unhandled_elements_are_dropped(self):
        """Test that elements without an output node leave no trace."""
        doc = convert_and_validate("'''\n\ntext\n")
        assert child_types(doc) == ["Paragraph"]


class TestSections:
    """Tests for sections and headings."""

    def test_heading_depths(self):
        """Test that nested sections give headers of increasing depth."""
        doc = convert_and_validate("= A\n\n== B\n\n=== C\n")
        headers = find_nodes(doc, "Header")
        assert [header.depth for header in headers] == [1, 2, 3]
        assert [header.raw for header in headers] == ["A", "B", "C"]

    def test_sections_are_flattened(self):
        """Test that section content is emitted beside the section's header."""
        doc = convert_and_validate("== First\n\none\n\n== Second\n\ntwo\n")
        assert child_types(doc) == ["Header", "Paragraph", "Header", "Paragraph"]

    def test_section_id(self):
        """Test that a section's id is emitted before its header."""
        doc = convert_and_validate("[[intro]]\n== Introduction\n\ntext\n")
        assert child_types(doc) == ["ID", "Header", "Paragraph"]
        assert span(doc.children[0]) == (1, 2, 1, 7)

    def test_preamble_is_flattened(self):
        """Test that the preamble's blocks are emitted directly."""
        doc = convert_and_validate("= T\n\nintro\n\n== S\n\nbody\n")
        assert child_types(doc) == ["Header", "Paragraph", "Header", "Paragraph"]

    def test_block_title_before_section(self):
        """Test that a block title line above a heading keeps the section and its content."""
        doc = convert_and_validate(".T\n== S\n\ntext\n")
        assert child_types(doc) == ["Header", "Paragraph"]
        assert doc.children[0].raw == "S"
        assert span(doc.children[0]) == (2, 3, 2, 4)


class TestParagraphs:
    """Tests for paragraphs."""

    def test_repeated_text_resolves_to_own_line(self):
        """Test that identical paragraphs are located on their own lines."""
        doc = convert_and_validate("A\n\nA\n")
        texts = str_nodes(doc)
        assert [t.loc.start.line for t in texts] == [1, 3]

    def test_comment_inside_paragraph(self):
        """Test that a comment line within a paragraph is skipped."""
        doc = convert_and_validate("\nA\n// C\nB\n")
        texts = str_nodes(doc)
        assert len(texts) == 1
        assert texts[0].value == "A\nB"
        assert span(texts[0]) == (2, 0, 4, 1)
        assert texts[0].range == (1, 9)

    def test_custom_comment_marker(self):
        """Test that a configured comment marker is honoured."""
        config = AdocConverterConfig(comment_marker="#")
        doc = convert_and_validate("A\n# C\nB\n", config)
        texts = str_nodes(doc)
        assert texts[0].value == "A\nB"
        assert span(texts[0]) == (1, 0, 3, 1)

    def test_literal_paragraph(self):
        """Test an indented literal paragraph."""
        doc = convert_and_validate(" text\n text")
        texts = str_nodes(doc)
        assert texts[0].value == "text\ntext"
        assert span(texts[0]) == (1, 1, 2, 5)

    def test_block_title(self):
        """Test that a paragraph title becomes a BlockTitle child."""
        doc = convert_and_validate(".Title\nparagraph text\n")
        paragraph = doc.children[0]
        assert child_types(paragraph) == ["BlockTitle", "Str"]
        assert paragraph.children[0].raw == ".Title"
        assert span(paragraph.children[0]) == (1, 0, 1, 6)
        assert span(paragraph) == (1, 0, 2, 14)


class TestLists:
    """Tests for lists and description lists."""

    def test_single_item(self):
        """Test a list with a single item."""
        doc = convert_and_validate("- text")
        assert child_types(doc) == ["List"]
        item = doc.children[0].children[0]
        assert item.type == "ListItem"
        assert child_types(item) == ["Paragraph"]
        assert item.range == (2, 6)

    def test_nested_list(self):
        """Test the spans of a nested list."""
        doc = convert_and_validate("* value 1\n** value 2\n* value 3\n")
        texts = str_nodes(doc)
        assert [t.value for t in texts] == ["value 1", "value 2", "value 3"]
        assert [t.range for t in texts] == [(2, 9), (13, 20), (23, 30)]

        outer = doc.children[0]
        assert child_types(outer) == ["ListItem", "ListItem"]
        assert child_types(outer.children[0]) == ["Paragraph", "List"]

    def test_checklist(self):
        """Test that checkbox markers are not part of the item text."""
        doc = convert_and_validate("* [x] checked\n* [ ] not checked")
        assert [t.value for t in str_nodes(doc)] == ["checked", "not checked"]
        assert span(str_nodes(doc)[0]) == (1, 6, 1, 13)

    def test_item_with_attached_code(self):
        """Test a list item with a code block attached by a continuation."""
        text = ". Install:\n+\n[source,bash]\n----\npip install -e .\n----\n"
        doc = convert_and_validate(text)
        item = doc.children[0].children[0]
        assert child_types(item) == ["Paragraph", "CodeBlock"]
        code = item.children[1]
        assert code.lang == "bash"
        assert span(code) == (5, 0, 5, 16)

    def test_description_list_on_separate_lines(self):
        """Test that identical descriptions resolve to their own lines."""
        text = "First term::\ndefinition\n\nSecond term::\ndefinition\n"
        doc = convert_and_validate(text)
        items = find_nodes(doc, "ListItem")
        assert len(items) == 4
        assert [t.value for t in str_nodes(doc)] == ["First term", "definition", "Second term", "definition"]
        assert [t.loc.start.line for t in str_nodes(doc)] == [1, 2, 4, 5]

    def test_description_list_inline(self):
        """Test that terms and inline descriptions are sibling list items."""
        doc = convert_and_validate("A:: B\nC:: D")
        assert child_types(doc) == ["List"]
        assert child_types(doc.children[0]) == ["ListItem"] * 4
        texts = str_nodes(doc)
        assert [t.value for t in texts] == ["A", "B", "C", "D"]
        assert span(texts[1]) == (1, 4, 1, 5)
        assert span(texts[3]) == (2, 4, 2, 5)

    def test_description_same_as_term(self):
        """Test that a description repeating its term is located after the term."""
        doc = convert_and_validate("A:: A\n")
        term, description = str_nodes(doc)
        assert span(term) == (1, 0, 1, 1)
        assert span(description) == (1, 4, 1, 5)
        assert description.range == (4, 5)

    def test_list_title(self):
        """Test that a list title is the list's first child."""
        doc = convert_and_validate(".Steps\n* one\n* two\n")
        assert child_types(doc.children[0]) == ["BlockTitle", "ListItem", "ListItem"]


class TestBlocks:
    """Tests for delimited blocks."""

    def test_source_block(self):
        """Test a source block with a language."""
        doc = convert_and_validate("[source,ruby]\n----\nputs 'Hello, world!'\n----\n")
        assert child_types(doc) == ["CodeBlock"]
        code = doc.children[0]
        assert isinstance(code, TxtASTCodeBlockNode)
        assert code.lang == "ruby"
        assert code.value == "puts 'Hello, world!'"
        assert span(code) == (3, 0, 3, 20)

    def test_code_keeps_comment_lines(self):
        """Test that lines that look like comments are part of code."""
        doc = convert_and_validate("----\n// not a comment\ncode\n----\n")
        code = doc.children[0]
        assert code.value == "// not a comment\ncode"
        assert code.lang is None
        assert span(code) == (2, 0, 3, 4)

    def test_titled_code_block_covers_title(self):
        """Test that a code block's span includes its title."""
        doc = convert_and_validate(".Example\n----\ncode\n----\n")
        code = doc.children[0]
        assert child_types(code) == ["BlockTitle"]
        assert span(code) == (1, 0, 3, 4)

    def test_fenced_block(self):
        """Test a fenced code block."""
        doc = convert_and_validate("```python\nprint(1)\n```\n")
        code = doc.children[0]
        assert code.lang == "python"
        assert code.value == "print(1)"

    def test_example_is_flattened(self):
        """Test that example block content is emitted directly."""
        doc = convert_and_validate("====\nText\n====\n")
        assert child_types(doc) == ["Paragraph"]
        assert span(doc.children[0]) == (2, 0, 2, 4)

    def test_repeated_text_in_example(self):
        """Test that identical paragraphs in an example block are located on their own lines."""
        doc = convert_and_validate("====\nA\n\nA\n====\n")
        assert child_types(doc) == ["Paragraph", "Paragraph"]
        assert [t.loc.start.line for t in str_nodes(doc)] == [2, 4]

    def test_block_admonition(self):
        """Test an admonition written as a styled example block."""
        doc = convert_and_validate("[WARNING]\n====\nText\n====\n")
        assert child_types(doc) == ["Admonition"]
        admonition = doc.children[0]
        assert admonition.style == "WARNING"
        assert child_types(admonition) == ["Paragraph"]
        assert child_types(admonition.children[0]) == ["Str"]

    def test_paragraph_admonition(self):
        """Test an admonition paragraph."""
        doc = convert_and_validate("NOTE: text")
        admonition = doc.children[0]
        assert admonition.type == "Admonition"
        assert admonition.style == "NOTE"
        assert span(str_nodes(doc)[0]) == (1, 6, 1, 10)

    def test_admonition_without_content_raises(self, converter):
        """Test that an admonition with nothing in it is an error."""
        document = AdocDocument()
        document.blocks = [AdocAdmonition(1, "NOTE", [])]
        with pytest.raises(AdocInvalidAdmonitionError) as exc_info:
            converter.convert_document(document, "NOTE:")

        assert exc_info.value.line == 1

    def test_quote(self):
        """Test a quote block."""
        doc = convert_and_validate("____\nquoted\n____\n")
        assert child_types(doc) == ["BlockQuote"]
        quote = doc.children[0]
        assert quote.raw == ""
        assert child_types(quote) == ["Paragraph"]

    def test_repeated_text_in_quote(self):
        """Test that identical paragraphs in a quote are located on their own lines."""
        doc = convert_and_validate("____\nA\n\nA\n____\n")
        quote = doc.children[0]
        assert child_types(quote) == ["Paragraph", "Paragraph"]
        texts = str_nodes(doc)
        assert [t.loc.start.line for t in texts] == [2, 4]
        assert texts[0].range != texts[1].range

    def test_sidebar_with_title(self):
        """Test a titled sidebar."""
        doc = convert_and_validate(".Note\n****\ninside\n****\n")
        assert child_types(doc) == ["Sidebar"]
        assert child_types(doc.children[0]) == ["BlockTitle", "Paragraph"]

    def test_image(self):
        """Test an image with alt text."""
        doc = convert_and_validate("image::sunset.jpg[Sunset]\n")
        image = doc.children[0]
        assert image.type == "Image"
        assert image.raw == "image::sunset.jpg[Sunset]"
        assert span(image) == (1, 0, 1, 25)
        assert child_types(image) == ["Attribute", "Attribute", "Str"]
        assert [(a.name, a.raw) for a in image.children[:2]] == [("target", "sunset.jpg"), ("alt", "Sunset")]
        assert span(image.children[0]) == (1, 7, 1, 17)
        assert span(image.children[1]) == (1, 18, 1, 24)

    def test_toc(self):
        """Test a table of contents macro."""
        doc = convert_and_validate("toc::[]\n")
        assert child_types(doc) == ["TOC"]
        assert doc.children[0].children[0].value == "toc::[]"


class TestTables:
    """Tests for tables."""

    def test_simple_table(self):
        """Test that cells on one line resolve left to right."""
        doc = convert_and_validate("|===\n|A|B\n|C|D\n|===\n")
        table = doc.children[0]
        assert child_types(table) == ["TableRow", "TableRow"]

        first_row = table.children[0]
        assert child_types(first_row) == ["TableCell", "TableCell"]
        a_cell, b_cell = first_row.children
        assert span(a_cell) == (2, 1, 2, 2)
        assert b_cell.loc.start.column > a_cell.loc.end.column

    def test_cell_text_repeated_in_earlier_cell(self):
        """Test that a cell's text is searched after the previous cell on the same line."""
        doc = convert_and_validate("|===\n|Haystack with needles. |needle\n|===\n")
        cells = find_nodes(doc, "TableCell")
        assert [cell.raw for cell in cells] == ["Haystack with needles.", "needle"]
        assert span(cells[1]) == (2, 25, 2, 31)

    def test_row_starting_where_previous_row_ended(self):
        """Test that a row sharing a line with the previous row's last cell is located after it."""
        doc = convert_and_validate("|===\n|A |A\na|* A\n|A|A\n|===")
        rows = doc.children[0].children
        assert child_types(doc.children[0]) == ["TableRow"] * 3
        assert rows[1].range == (13, 19)
        assert rows[2].range == (20, 21)
        assert span(rows[2]) == (4, 3, 4, 4)
        assert rows[2].range[0] >= rows[1].range[1]

    def test_asciidoc_cell(self):
        """Test that an AsciiDoc cell holds converted blocks."""
        doc = convert_and_validate("|===\na|* text\n|===")
        path = []
        node = doc
        while node.children:
            node = node.children[0]
            path.append(node.type)

        assert path == ["Table", "TableRow", "TableCell", "List", "ListItem", "Paragraph", "Str"]
        assert node.value == "text"
        assert span(node) == (2, 4, 2, 8)

    def test_table_attributes(self):
        """Test that the table's attribute line becomes an Attributes node."""
        text = '[cols="1,2",options="header"]\n|===\n|A |B\n\n|C |D\n|===\n'
        doc = convert_and_validate(text)
        table = doc.children[0]
        assert child_types(table) == ["Attributes", "TableRow", "TableRow"]

        attributes = table.children[0]
        assert attributes.raw == '[cols="1,2",options="header"]'
        assert span(attributes) == (1, 0, 1, 29)

    def test_denied_table_attributes(self):
        """Test that denylisted attributes are left out."""
        config = AdocConverterConfig(
            table_attribute_denylist=["attribute_entries", "colcount", "cols", "options", "rowcount", "style",
                                      "tablepcwidth"]
        )
        text = '[cols="1,2",options="header"]\n|===\n|A |B\n\n|C |D\n|===\n'
        doc = convert_and_validate(text, config)
        assert child_types(doc.children[0]) == ["TableRow", "TableRow"]


class TestContainment:
    """Tests for the structural rules over larger documents."""

    def test_mixed_document_validates(self):
        """Test that a document using most block kinds is well formed."""
        text = (
            "// Sample document\n"
            "[id='getting-started']\n"
            "= Getting started\n"
            "Doc Writer <doc@example.com>\n"
            "\n"
            "Install the package, then run the converter.\n"
            "\n"
            "== Installation\n"
            "\n"
            ". Create a virtual environment\n"
            ". Install in development mode:\n"
            "+\n"
            "[source,bash]\n"
            "----\n"
            "pip install -e .\n"
            "----\n"
            "\n"
            ".Options\n"
            "[cols=\"1,2\",options=\"header\"]\n"
            "|===\n"
            "|Option |Meaning\n"
            "\n"
            "|--format\n"
            "|json or tree\n"
            "|===\n"
            "\n"
            "NOTE: Comment lines are skipped.\n"
            "\n"
            "image::diagram.png[Diagram]\n"
        )
        doc = convert_and_validate(text)
        assert child_types(doc) == [
            "ID", "Header", "Author", "Paragraph", "Header", "List", "Table", "Admonition", "Image"
        ]

        def check(node):
            for child in node.children:
                assert node.range[0] <= child.range[0] <= child.range[1] <= node.range[1]
                check(child)

        check(doc)
