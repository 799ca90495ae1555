"""Tests for block-level parsing: document header, sections, lists, tables, blocks."""

import pytest

from tintero import parse, parse_element, parse_file
from tintero.config import ParseConfig, parse_config_context
from tintero.errors import ParseInputError
from tintero.nodes import (
    Admonition,
    AdmonitionType,
    BlockQuote,
    CodeBlock,
    DescriptionList,
    Example,
    Listing,
    List,
    ListType,
    Literal,
    Open,
    Paragraph,
    Passthrough,
    Section,
    Sidebar,
    Strong,
    Table,
    Text,
    Verse,
)
from tintero.parser import Parser

# =============================================================================
# Entry points
# =============================================================================


class TestEntryPoints:
    def test_parse_returns_document(self) -> None:
        doc = parse("Hello")
        assert doc.element_type == "document"
        assert len(doc.elements) == 1

    @pytest.mark.parametrize("source", ["", "   ", "\n\n", " \t\n"])
    def test_blank_input_raises(self, source: str) -> None:
        with pytest.raises(ParseInputError):
            parse(source)

    def test_none_input_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse(None)  # type: ignore[arg-type]

    def test_parse_file(self, tmp_path) -> None:
        path = tmp_path / "guide.adoc"
        path.write_text("= Guide\n\n== Install\n", encoding="utf-8")
        doc = parse_file(path)
        assert doc.header.title == "Guide"
        assert doc.elements[0].location.source_file == str(path)

    def test_parse_file_missing_raises_oserror(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            parse_file(tmp_path / "missing.adoc")

    def test_parse_file_empty_path(self) -> None:
        with pytest.raises(ParseInputError):
            parse_file("")

    def test_parse_file_empty_content(self, tmp_path) -> None:
        path = tmp_path / "empty.adoc"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ParseInputError):
            parse_file(path)

    def test_parse_element_skips_leading_blanks(self) -> None:
        element = parse_element("\n\n== Title")
        assert isinstance(element, Section)
        assert element.title == "Title"

    def test_parse_element_empty(self) -> None:
        assert parse_element("") is None
        assert parse_element(":name: value") is None

    def test_parser_is_reusable(self) -> None:
        parser = Parser()
        first = parser.parse("A footnote:[x]")
        second = parser.parse("B footnote:[y]")
        assert first.elements[0].children[1].reference_label == "1"
        assert second.elements[0].children[1].reference_label == "1"

    def test_locations(self) -> None:
        doc = parse("Intro\n\n== Next", source_file="guide.adoc")
        section = doc.elements[1]
        assert section.location.lineno == 3
        assert section.location.col_offset == 1
        assert section.location.source_file == "guide.adoc"


# =============================================================================
# Header and attributes
# =============================================================================


class TestDocumentHeader:
    def test_title(self) -> None:
        doc = parse("= My Document\n\nBody")
        assert doc.header.title == "My Document"
        assert doc.title == "My Document"
        assert isinstance(doc.elements[0], Paragraph)

    def test_title_after_blank_lines(self) -> None:
        assert parse("\n\n= Spaced Out  \n").header.title == "Spaced Out"

    def test_second_single_equals_is_a_section(self) -> None:
        doc = parse("= One\n\n= Two")
        assert doc.header.title == "One"
        assert isinstance(doc.elements[0], Section)
        assert doc.elements[0].level == 1

    def test_no_title(self) -> None:
        doc = parse("== Only a section")
        assert doc.header.title == ""
        assert doc.elements[0].level == 2

    def test_attribute_lines(self) -> None:
        doc = parse("= Guide\n:author: Jane Doe\n:toc:\n:sectnums!:\n:version:  1.2  \n\nBody")
        attrs = doc.attributes
        assert attrs.get_attribute("author") == "Jane Doe"
        assert attrs.get_attribute("toc") == "true"
        assert attrs.get_attribute("sectnums") == "false"
        assert attrs.get_attribute("version") == "1.2"
        assert doc.header.attributes["author"] == "Jane Doe"
        assert len(doc.elements) == 1

    def test_header_fields_from_attributes(self) -> None:
        doc = parse(
            "= Guide\n:author: Jane Doe\n:email: jane@example.org\n"
            ":revnumber: 2.0\n:revdate: 2024-01-01\n"
        )
        header = doc.header
        assert header.author == "Jane Doe"
        assert header.email == "jane@example.org"
        assert header.revision == "2.0"
        assert header.date == "2024-01-01"

    def test_later_attribute_overrides(self) -> None:
        doc = parse(":mode: draft\n\nText\n\n:mode: final")
        assert doc.attributes["mode"] == "final"


# =============================================================================
# Sections and paragraphs
# =============================================================================


class TestSections:
    @pytest.mark.parametrize(("marker", "level"), [("==", 2), ("===", 3), ("======", 6)])
    def test_level_is_marker_length(self, marker: str, level: int) -> None:
        section = parse(f"{marker} Heading").elements[0]
        assert isinstance(section, Section)
        assert section.level == level
        assert section.title == "Heading"

    def test_symmetric_closing_marker(self) -> None:
        assert parse("== Title ==").elements[0].title == "Title"

    def test_sections_are_flat(self) -> None:
        doc = parse("== A\n\nText\n\n=== B")
        assert [e.element_type for e in doc.elements] == ["section", "paragraph", "section"]

    def test_section_id_attribute(self) -> None:
        section = parse("== Getting Started!").elements[0]
        assert section.attributes["id"] == "getting-started"
        assert section.anchor_id == "getting-started"

    def test_section_ids_disabled(self) -> None:
        with parse_config_context(ParseConfig(section_ids=False)):
            section = parse("== Getting Started").elements[0]
        assert "id" not in section.attributes

    def test_explicit_id(self) -> None:
        section = parse("[#custom-id]\n== Setup").elements[0]
        assert isinstance(section, Section)
        assert section.id == "custom-id"
        assert section.attributes["id"] == "custom-id"
        assert section.anchor_id == "custom-id"


class TestParagraphs:
    def test_lines_join(self) -> None:
        doc = parse("line one\nline two\n\nnext")
        first, second = doc.elements
        assert first.text == "line one\nline two"
        assert second.text == "next"

    def test_inline_children(self) -> None:
        para = parse("Run *make* now").elements[0]
        assert [type(c) for c in para.children] == [Text, Strong, Text]

    def test_block_title(self) -> None:
        para = parse(".Example title\nSome text").elements[0]
        assert isinstance(para, Paragraph)
        assert para.attributes["title"] == "Example title"
        assert para.text == "Some text"

    def test_block_title_ends_paragraph(self) -> None:
        doc = parse("First\n.Title\n----\ncode\n----")
        assert doc.elements[0].text == "First"
        assert doc.elements[1].attributes["title"] == "Title"

    def test_parent_links(self) -> None:
        doc = parse("Hello *world*")
        para = doc.elements[0]
        assert para.parent is doc
        assert all(child.parent is para for child in para.children)


# =============================================================================
# Lists
# =============================================================================


class TestLists:
    def test_unordered(self) -> None:
        lst = parse("* one\n* two\n** nested\n\n* three").elements[0]
        assert isinstance(lst, List)
        assert lst.list_type is ListType.UNORDERED
        assert [i.text for i in lst.items] == ["one", "two", "nested", "three"]
        assert [i.level for i in lst.items] == [1, 1, 2, 1]

    def test_ordered_start(self) -> None:
        lst = parse("3. c\n4. d").elements[0]
        assert lst.ordered
        assert lst.list_type is ListType.ORDERED
        assert lst.start_number == 3
        assert len(lst.items) == 2

    def test_checkboxes(self) -> None:
        items = parse("* [x] Done\n* [ ] Todo\n* [X] Caps\n* Plain").elements[0].items
        assert [i.is_checkbox for i in items] == [True, True, True, False]
        assert [i.is_checked for i in items] == [True, False, True, False]
        assert [i.text for i in items] == ["Done", "Todo", "Caps", "Plain"]

    def test_item_inline_content(self) -> None:
        item = parse("* Use *bold* here").elements[0].items[0]
        assert isinstance(item.children[1], Strong)

    def test_list_ends_at_other_block(self) -> None:
        doc = parse("* a\n* b\n\nAfter")
        assert [e.element_type for e in doc.elements] == ["list", "paragraph"]

    def test_description_list(self) -> None:
        dlist = parse("CPU:: Central processing unit\nRAM::\n\nGPU:: Graphics").elements[0]
        assert isinstance(dlist, DescriptionList)
        assert dlist.list_type is ListType.DEFINITION
        assert [i.term for i in dlist.items] == ["CPU", "RAM", "GPU"]
        assert [i.description for i in dlist.items] == [
            "Central processing unit",
            "",
            "Graphics",
        ]
        assert dlist.items[1].children == ()


# =============================================================================
# Tables
# =============================================================================


class TestTables:
    def test_row_cells(self) -> None:
        table = parse("|===\n|A |B |C\n|===").elements[0]
        assert isinstance(table, Table)
        assert table.header is None
        (row,) = table.rows
        assert [c.content for c in row.cells] == ["A", "B", "C"]

    def test_blank_cells_dropped(self) -> None:
        row = parse("|===\n|A | |C|\n|===").elements[0].rows[0]
        assert [c.content for c in row.cells] == ["A", "C"]

    def test_implicit_header(self) -> None:
        table = parse(
            "|===\n|Name |Role\n\n|Ada |Engineer\n|Bob |Ops\n|==="
        ).elements[0]
        assert table.header is not None
        assert [c.content for c in table.header.cells] == ["Name", "Role"]
        assert all(c.is_header for c in table.header.cells)
        assert table.header.parent is table
        assert len(table.rows) == 2

    def test_implicit_header_disabled(self) -> None:
        with parse_config_context(ParseConfig(implicit_table_header=False)):
            table = parse("|===\n|Name |Role\n\n|Ada |Engineer\n|===").elements[0]
        assert table.header is None
        assert len(table.rows) == 2

    def test_single_row_never_header(self) -> None:
        table = parse("|===\n|Only |Row\n\n|===").elements[0]
        assert table.header is None

    @pytest.mark.parametrize("attrs", ["[%header]", '[options="header"]', "[opts=header]"])
    def test_header_option(self, attrs: str) -> None:
        table = parse(f"{attrs}\n|===\n|H1 |H2\n|a |b\n|===").elements[0]
        assert isinstance(table, Table)
        assert [c.content for c in table.header.cells] == ["H1", "H2"]
        assert len(table.rows) == 1

    def test_noheader_option(self) -> None:
        table = parse("[%noheader]\n|===\n|A |B\n\n|C |D\n|===").elements[0]
        assert table.header is None

    def test_spans(self) -> None:
        row = parse("|===\n2+|Wide |C\n.3+|Tall |D\n|===").elements[0].rows
        wide, c = row[0].cells
        assert (wide.content, wide.col_span, wide.row_span) == ("Wide", 2, 1)
        assert c.col_span == 1
        tall = row[1].cells[0]
        assert (tall.content, tall.col_span, tall.row_span) == ("Tall", 1, 3)

    def test_column_alignment(self) -> None:
        table = parse('[cols="<1,^2,>1"]\n|===\n|a |b |c\n|===').elements[0]
        assert [c.alignment for c in table.rows[0].cells] == ["left", "center", "right"]

    def test_unclosed_table(self) -> None:
        table = parse("|===\n|A |B").elements[0]
        assert len(table.rows) == 1

    def test_title(self) -> None:
        table = parse(".Inventory\n|===\n|A\n|===").elements[0]
        assert table.attributes["title"] == "Inventory"


# =============================================================================
# Delimited blocks
# =============================================================================


class TestDelimitedBlocks:
    def test_code_block_language(self) -> None:
        block = parse("----python\ndef f():\n    return 1\n----").elements[0]
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.content == "def f():\n    return 1"

    def test_code_block_trims_blank_lines(self) -> None:
        block = parse("----\n\ncode\n\n----").elements[0]
        assert block.language is None
        assert block.content == "code"

    def test_code_block_keeps_markup(self) -> None:
        block = parse("----\n== Not a section\n* not a list\n----").elements[0]
        assert block.content == "== Not a section\n* not a list"

    def test_literal(self) -> None:
        block = parse("....\n  literal  text\n....").elements[0]
        assert isinstance(block, Literal)
        assert block.content == "  literal  text"

    def test_passthrough(self) -> None:
        block = parse("++++\n<b>raw</b>\n++++").elements[0]
        assert isinstance(block, Passthrough)
        assert block.content == "<b>raw</b>"

    def test_block_quote_attribution(self) -> None:
        quote = parse("____\nQuote text\n-- Ada Lovelace, Notes\n____").elements[0]
        assert isinstance(quote, BlockQuote)
        assert quote.content == "Quote text"
        assert quote.attribution == "Ada Lovelace"
        assert quote.cite == "Notes"

    def test_unclosed_block_quote(self) -> None:
        quote = parse("____\nunterminated").elements[0]
        assert isinstance(quote, BlockQuote)
        assert quote.content == "unterminated"

    def test_sidebar(self) -> None:
        sidebar = parse("****\nInside *sidebar*.\n****").elements[0]
        assert isinstance(sidebar, Sidebar)
        (para,) = sidebar.children
        assert isinstance(para, Paragraph)
        assert para.parent is sidebar

    def test_example_with_title(self) -> None:
        example = parse(".Sample\n====\nExample body\n====").elements[0]
        assert isinstance(example, Example)
        assert example.title == "Sample"
        assert example.children[0].text == "Example body"

    def test_open_block(self) -> None:
        block = parse("--\nOpen content\n\n* item\n--").elements[0]
        assert isinstance(block, Open)
        assert [c.element_type for c in block.children] == ["paragraph", "list"]

    def test_nested_compound_blocks(self) -> None:
        sidebar = parse("****\n====\ninner\n====\n****").elements[0]
        example = sidebar.children[0]
        assert isinstance(example, Example)
        assert example.children[0].text == "inner"

    def test_unclosed_compound_block(self) -> None:
        sidebar = parse("****\ntext").elements[0]
        assert isinstance(sidebar, Sidebar)
        assert sidebar.children[0].text == "text"

    def test_content_after_block(self) -> None:
        doc = parse("----\ncode\n----\n\nAfter")
        assert [e.element_type for e in doc.elements] == ["code_block", "paragraph"]


# =============================================================================
# Attribute blocks
# =============================================================================


class TestAttributeBlocks:
    def test_verse(self) -> None:
        verse = parse(
            "[verse, Carl Sandburg, Fog]\n____\nThe fog comes\non little cat feet.\n____"
        ).elements[0]
        assert isinstance(verse, Verse)
        assert verse.content == "The fog comes\non little cat feet."
        assert verse.author == "Carl Sandburg"
        assert verse.citation == "Fog"
        assert verse.attributes["style"] == "verse"

    def test_verse_paragraph(self) -> None:
        verse = parse("[verse, Anon]\nLine one\nLine two").elements[0]
        assert isinstance(verse, Verse)
        assert verse.content == "Line one\nLine two"
        assert verse.author == "Anon"

    def test_quote(self) -> None:
        quote = parse("[quote, Albert Einstein, Speech]\n____\nImagination.\n____").elements[0]
        assert isinstance(quote, BlockQuote)
        assert quote.attribution == "Albert Einstein"
        assert quote.cite == "Speech"
        assert quote.content == "Imagination."

    def test_source_block(self) -> None:
        block = parse("[source,python]\n----\nprint('hi')\n----").elements[0]
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.content == "print('hi')"

    def test_attribute_line_between_attributes_and_block(self) -> None:
        doc = parse("[source,python]\n:foo: bar\n----\nx = 1\n----")
        (block,) = doc.elements
        assert isinstance(block, CodeBlock)
        assert block.language == "python"
        assert block.content == "x = 1"
        assert doc.attributes["foo"] == "bar"

    def test_title_and_attribute_lines_before_block(self) -> None:
        doc = parse("[source,ruby]\n.Example\n:lang: rb\n\n----\nputs 1\n----")
        (block,) = doc.elements
        assert block.language == "ruby"
        assert block.attributes["title"] == "Example"
        assert doc.attributes["lang"] == "rb"

    def test_attribute_lines_then_end_of_input(self) -> None:
        (para,) = parse("[source,python]\n:foo: bar").elements
        assert isinstance(para, Paragraph)
        assert para.text == "[source,python]"

    def test_source_paragraph(self) -> None:
        block = parse("[source,ruby]\nputs 1").elements[0]
        assert isinstance(block, CodeBlock)
        assert block.language == "ruby"
        assert block.content == "puts 1"

    def test_listing(self) -> None:
        block = parse("[listing]\n----\n$ make\n----").elements[0]
        assert isinstance(block, Listing)
        assert block.content == "$ make"

    def test_literal_paragraph(self) -> None:
        block = parse("[literal]\n  indented\n    more").elements[0]
        assert isinstance(block, Literal)
        assert block.content == "indented\n  more"

    def test_pass_paragraph(self) -> None:
        block = parse("[pass]\n<u>raw</u>").elements[0]
        assert isinstance(block, Passthrough)
        assert block.content == "<u>raw</u>"

    def test_admonition_paragraph(self) -> None:
        admonition = parse("[NOTE]\nRemember this.").elements[0]
        assert isinstance(admonition, Admonition)
        assert admonition.admonition_type is AdmonitionType.NOTE
        assert admonition.content == "Remember this."

    def test_admonition_block(self) -> None:
        admonition = parse("[WARNING]\n====\nCareful.\n\n* one\n====").elements[0]
        assert isinstance(admonition, Admonition)
        assert admonition.admonition_type is AdmonitionType.WARNING
        assert [c.element_type for c in admonition.children] == ["paragraph", "list"]

    @pytest.mark.parametrize("style", ["sidebar", "example", "NOTE", "abstract"])
    def test_open_block_masquerade(self, style: str) -> None:
        block = parse(f"[{style}]\n--\nLooks different\n--").elements[0]
        assert isinstance(block, Open)
        assert block.masquerade_type == style

    def test_shorthand_attributes_on_paragraph(self) -> None:
        para = parse("[#intro.lead.big%hardbreaks]\nHello").elements[0]
        assert isinstance(para, Paragraph)
        assert para.attributes["id"] == "intro"
        assert para.attributes["role"] == "lead big"
        assert para.attributes["options"] == "hardbreaks"

    def test_named_attributes(self) -> None:
        para = parse('[role="note", data=x]\nHello').elements[0]
        assert para.attributes["role"] == "note"
        assert para.attributes["data"] == "x"

    def test_title_between_attributes_and_block(self) -> None:
        block = parse("[source,sh]\n.Install\n----\nmake\n----").elements[0]
        assert isinstance(block, CodeBlock)
        assert block.attributes["title"] == "Install"

    def test_dangling_attribute_line(self) -> None:
        para = parse("Text\n\n[unused]").elements[1]
        assert isinstance(para, Paragraph)
        assert para.text == "[unused]"
        assert para.children[0].content == "[unused]"


# =============================================================================
# Admonitions
# =============================================================================


class TestAdmonitions:
    @pytest.mark.parametrize("kind", list(AdmonitionType))
    def test_every_kind(self, kind: AdmonitionType) -> None:
        admonition = parse(f"{kind.name}: Text").elements[0]
        assert isinstance(admonition, Admonition)
        assert admonition.admonition_type is kind
        assert admonition.content == "Text"

    def test_continuation_lines(self) -> None:
        admonition = parse("NOTE: Mind the gap.\nSecond line.\n\nAfter").elements[0]
        assert admonition.content == "Mind the gap.\nSecond line."

    def test_inline_content(self) -> None:
        admonition = parse("TIP: Use *bold*.").elements[0]
        assert any(isinstance(c, Strong) for c in admonition.children)

    def test_label(self) -> None:
        assert AdmonitionType.WARNING.label == "Warning"
