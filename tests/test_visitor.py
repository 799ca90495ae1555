"""Tests for BaseVisitor dispatch and table-of-contents construction."""

from tintero import parse
from tintero.nodes import (
    CrossReference,
    Node,
    Section,
    TableCell,
    TableHeader,
    TableOfContents,
    TableRow,
)
from tintero.visitor import BaseVisitor, build_toc_entries, collect_sections


class CountingVisitor(BaseVisitor[None]):
    def __init__(self) -> None:
        self.counts: dict[str, int] = {}

    def visit_default(self, node: Node) -> None:
        self.counts[node.element_type] = self.counts.get(node.element_type, 0) + 1


class XrefCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.targets: list[str] = []

    def visit_cross_reference(self, node: CrossReference) -> None:
        self.targets.append(node.target_id)


class RowOrderVisitor(BaseVisitor[None]):
    def __init__(self) -> None:
        self.order: list[str] = []

    def visit_table_header(self, node: TableHeader) -> None:
        self.order.append("header")

    def visit_table_row(self, node: TableRow) -> None:
        self.order.append("row")

    def visit_table_cell(self, node: TableCell) -> None:
        self.order.append(node.content)


class TestBaseVisitor:
    def test_counts_every_node(self) -> None:
        visitor = CountingVisitor()
        visitor.visit(parse("== Title\n\nSome *bold* text\n\n* one\n* two"))
        assert visitor.counts == {
            "document": 1,
            "section": 1,
            "paragraph": 1,
            "text": 4,
            "strong": 1,
            "list": 1,
            "list_item": 2,
        }

    def test_specific_visit_method(self) -> None:
        collector = XrefCollector()
        collector.visit(parse("See <<a>> and\n\n* <<b,B>>"))
        assert collector.targets == ["a", "b"]

    def test_table_header_visited_before_rows(self) -> None:
        visitor = RowOrderVisitor()
        visitor.visit(parse("[%header]\n|===\n|H1 |H2\n|a |b\n|===").elements[0])
        assert visitor.order == ["header", "H1", "H2", "row", "a", "b"]

    def test_visit_returns_dispatch_result(self) -> None:
        class TypeName(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return node.element_type

        assert TypeName().visit(parse("x")) == "document"


class TestCollectSections:
    def test_document_order(self) -> None:
        doc = parse("== A\n\n=== A1\n\n== B")
        assert [s.title for s in collect_sections(doc)] == ["A", "A1", "B"]

    def test_skips_include_containers(self) -> None:
        container = Section("", 0)
        container.add_child(Section("Inner", 2))
        assert [s.title for s in collect_sections(container)] == ["Inner"]


class TestBuildTocEntries:
    def test_nesting(self) -> None:
        sections = [Section("A", 2), Section("A1", 3), Section("A2", 3), Section("B", 2)]
        entries = build_toc_entries(sections, 3)
        assert [e.title for e in entries] == ["A", "B"]
        assert [e.title for e in entries[0].entries] == ["A1", "A2"]
        assert entries[0].anchor_id == "a"

    def test_depth_filter(self) -> None:
        sections = [Section("A", 2), Section("A1", 3), Section("A1a", 4)]
        (entry,) = build_toc_entries(sections, 1)
        assert entry.entries == ()
        (entry,) = build_toc_entries(sections, 2)
        assert [e.title for e in entry.entries] == ["A1"]
        assert entry.entries[0].entries == ()

    def test_skipped_level_nests_under_nearest(self) -> None:
        sections = [Section("A", 2), Section("Deep", 4), Section("B", 2)]
        entries = build_toc_entries(sections, 3)
        assert [e.title for e in entries] == ["A", "B"]
        assert [e.title for e in entries[0].entries] == ["Deep"]

    def test_leading_deeper_section_is_a_root(self) -> None:
        entries = build_toc_entries([Section("Deep", 3), Section("A", 2)], 3)
        assert [e.title for e in entries] == ["Deep", "A"]

    def test_explicit_ids(self) -> None:
        (entry,) = build_toc_entries([Section("Install", 2, id="setup")], 3)
        assert entry.anchor_id == "setup"


class TestTocPopulation:
    def test_populated_from_document(self) -> None:
        doc = parse("= Doc\n\ntoc::[levels=1]\n\n== A\n\n=== A1\n\n== B")
        toc = doc.elements[0]
        assert isinstance(toc, TableOfContents)
        assert [e.title for e in toc.entries] == ["A", "B"]
        assert toc.entries[0].entries == ()

    def test_toc_after_sections(self) -> None:
        doc = parse("== A\n\ntoc::[]")
        toc = [n for n in doc.elements if isinstance(n, TableOfContents)][0]
        assert [e.title for e in toc.entries] == ["A"]
