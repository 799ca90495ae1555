"""Tests for inline parsing, footnotes and macros."""

import pytest

from tintero import parse
from tintero.nodes import (
    Anchor,
    CrossReference,
    Emphasis,
    Footnote,
    Highlight,
    Image,
    ImageMacro,
    IncludeMacro,
    InlineCode,
    Link,
    Macro,
    MacroType,
    Strong,
    Subscript,
    Superscript,
    TableOfContents,
    Text,
    VideoMacro,
)
from tintero.parsing import parse_macro_parameters, split_macro_parameters


def _inline(text: str) -> list:
    """Inline children of a one-paragraph document."""
    return list(parse(text).elements[0].children)


def _shape(text: str) -> list[tuple[str, str]]:
    shape = []
    for node in _inline(text):
        value = getattr(node, "content", None) or getattr(node, "text", "")
        shape.append((node.element_type, value))
    return shape


class TestSpans:
    def test_mixed_sequence(self) -> None:
        nodes = _inline("A *B* C _D_ E")
        assert [type(n) for n in nodes] == [Text, Strong, Text, Emphasis, Text]
        assert nodes[0].content == "A "
        assert nodes[1].text == "B"
        assert nodes[2].content == " C "
        assert nodes[3].text == "D"
        assert nodes[4].content == " E"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("*bold*", [("strong", "bold")]),
            ("**bold**text", [("strong", "bold"), ("text", "text")]),
            ("_em_", [("emphasis", "em")]),
            ("__em__phasis", [("emphasis", "em"), ("text", "phasis")]),
            ("#mark#", [("highlight", "mark")]),
            ("E=mc^2^", [("text", "E=mc"), ("superscript", "2")]),
            ("H~2~O", [("text", "H"), ("subscript", "2"), ("text", "O")]),
            ("Use `make`", [("text", "Use "), ("inline_code", "make")]),
        ],
    )
    def test_span_kinds(self, source: str, expected: list[tuple[str, str]]) -> None:
        assert _shape(source) == expected

    @pytest.mark.parametrize("source", ["snake_case_name", "2*3*4", "a#b#c", "plain text"])
    def test_constrained_marks_inside_words(self, source: str) -> None:
        nodes = _inline(source)
        assert [type(n) for n in nodes] == [Text]
        assert nodes[0].content == source

    def test_spans_are_not_reparsed(self) -> None:
        (code,) = _inline("`code *not bold*`")
        assert isinstance(code, InlineCode)
        assert code.content == "code *not bold*"

    def test_unclosed_mark_is_text(self) -> None:
        assert _shape("a *b c") == [("text", "a *b c")]


class TestLinksAndReferences:
    def test_bare_url(self) -> None:
        nodes = _inline("See https://example.org.")
        assert isinstance(nodes[1], Link)
        assert nodes[1].url == "https://example.org"
        assert nodes[1].text == "https://example.org"
        assert nodes[2].content == "."

    def test_url_with_text(self) -> None:
        (link,) = _inline("https://example.org/docs[Example Site]")
        assert link.url == "https://example.org/docs"
        assert link.text == "Example Site"

    def test_link_macro(self) -> None:
        nodes = _inline("Read link:docs/index.html[the docs] first")
        assert isinstance(nodes[1], Link)
        assert nodes[1].url == "docs/index.html"
        assert nodes[1].text == "the docs"

    def test_mailto_macro(self) -> None:
        link = _inline("Write mailto:team@example.org[us]")[1]
        assert link.url == "mailto:team@example.org"
        assert link.text == "us"

    def test_inline_image(self) -> None:
        image = _inline("Logo: image:icon.png[Icon] here")[1]
        assert isinstance(image, Image)
        assert image.src == "icon.png"
        assert image.alt == "Icon"

    def test_anchor(self) -> None:
        anchor = _inline("[[top,Top label]]Start")[0]
        assert isinstance(anchor, Anchor)
        assert anchor.id == "top"
        assert anchor.label == "Top label"

    def test_cross_reference(self) -> None:
        xref = _inline("See <<install,Install guide>>.")[1]
        assert isinstance(xref, CrossReference)
        assert xref.target_id == "install"
        assert xref.link_text == "Install guide"

    def test_cross_reference_without_text(self) -> None:
        xref = _inline("See <<install>>")[1]
        assert xref.target_id == "install"
        assert xref.link_text == ""

    def test_xref_macro(self) -> None:
        xref = _inline("See xref:setup[Setup] now")[1]
        assert isinstance(xref, CrossReference)
        assert xref.target_id == "setup"
        assert xref.link_text == "Setup"


class TestFootnotes:
    def test_sequential_numbering(self) -> None:
        doc = parse(
            "A footnote:[First]. B footnote:disclaimer[Second].\n\n"
            "C footnote:disclaimer[]. D footnote:[Third]."
        )
        notes = [
            n for para in doc.elements for n in para.children if isinstance(n, Footnote)
        ]
        assert [n.reference_label for n in notes] == ["1", "2", "2", "3"]
        assert [n.is_reference for n in notes] == [False, False, True, False]
        assert notes[0].id == "_footnotedef_1"
        assert notes[0].text == "First"
        assert notes[1].id == "disclaimer"
        assert notes[2].text == ""
        assert notes[3].id == "_footnotedef_3"

    def test_reference_before_definition(self) -> None:
        notes = [
            n for n in _inline("X footnote:later[] Y footnote:[other]") if isinstance(n, Footnote)
        ]
        assert [n.reference_label for n in notes] == ["1", "2"]
        assert notes[0].is_reference

    def test_numbering_is_per_parse(self) -> None:
        first = parse("A footnote:[x]").elements[0].children[1]
        second = parse("B footnote:[y]").elements[0].children[1]
        assert first.reference_label == second.reference_label == "1"


class TestMacros:
    def test_image_macro(self) -> None:
        image = parse('image::logo.png[Company logo,200,100,link="https://example.org"]').elements[0]
        assert isinstance(image, ImageMacro)
        assert image.macro_type is MacroType.BLOCK
        assert image.name == "image"
        assert image.src == "logo.png"
        assert image.alt == "Company logo"
        assert image.width == 200
        assert image.height == 100
        assert image.link == "https://example.org"

    def test_image_alt_from_file_name(self) -> None:
        assert parse("image::diagrams/flow.svg[]").elements[0].alt == "flow"

    def test_image_named_size(self) -> None:
        image = parse("image::a.png[width=50, height=oops]").elements[0]
        assert image.width == 50
        assert image.height is None

    def test_video_macro(self) -> None:
        video = parse("video::intro.webm[width=640,autoplay=true,poster=p.png]").elements[0]
        assert isinstance(video, VideoMacro)
        assert video.width == 640
        assert video.autoplay
        assert video.controls
        assert not video.loop
        assert video.poster == "p.png"
        assert video.video_format == "webm"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("video::clip.MOV[]", "mov"),
            ("video::clip.ogg[]", "ogg"),
            ("video::clip.xyz[]", "mp4"),
            ("video::clip[format=avi]", "avi"),
        ],
    )
    def test_video_format(self, source: str, expected: str) -> None:
        assert parse(source).elements[0].video_format == expected

    def test_unknown_block_macro(self) -> None:
        macro = parse("custom::target[a,b=c]").elements[0]
        assert type(macro) is Macro
        assert macro.name == "custom"
        assert macro.target == "target"
        assert macro.parameters == {"alt": "a", "title": "a", "b": "c"}
        assert macro.get_parameter("b") == "c"

    def test_block_macro_title(self) -> None:
        image = parse(".Architecture\nimage::arch.png[]").elements[0]
        assert image.attributes["title"] == "Architecture"

    def test_inline_macro(self) -> None:
        nodes = _inline("Press kbd:Ctrl[] now")
        macro = nodes[1]
        assert type(macro) is Macro
        assert macro.is_inline
        assert macro.name == "kbd"
        assert macro.target == "Ctrl"
        assert nodes[2].content == " now"

    def test_inline_include_is_not_expanded(self) -> None:
        macro = _inline("See include:other.adoc[] here")[1]
        assert isinstance(macro, IncludeMacro)
        assert macro.is_inline

    def test_table_of_contents(self) -> None:
        toc = parse('toc::[title="Contents",levels=2]').elements[0]
        assert isinstance(toc, TableOfContents)
        assert toc.title == "Contents"
        assert toc.max_depth == 2

    def test_table_of_contents_defaults(self) -> None:
        toc = parse("toc::[]").elements[0]
        assert toc.title == "Table of Contents"
        assert toc.max_depth == 3
        assert toc.entries == ()


class TestMacroParameters:
    def test_split_respects_quotes(self) -> None:
        assert split_macro_parameters('title="One, two",3') == ['title="One, two"', "3"]
        assert split_macro_parameters("a,'b,c'") == ["a", "'b,c'"]

    def test_positional_and_named(self) -> None:
        assert parse_macro_parameters('Logo,200,100,link="https://x.org"') == {
            "alt": "Logo",
            "title": "Logo",
            "param1": "200",
            "param2": "100",
            "link": "https://x.org",
        }

    def test_quoted_positional(self) -> None:
        assert parse_macro_parameters('"Hello, world"')["alt"] == "Hello, world"

    def test_empty(self) -> None:
        assert parse_macro_parameters("") == {}
