import pytest

from chunk_kit.chunking.sections import ROOT_TITLE, SectionTree, parse_sections

NESTED = "# A\nintro\n## B\nbee\n### C\nsee\n# D\ndee"


@pytest.fixture
def nested_tree() -> SectionTree:
    return parse_sections(NESTED, max_depth=3)


class TestParseSections:
    def test_top_level_sections(self, nested_tree: SectionTree) -> None:
        assert [s.title for s in nested_tree.top_level()] == ["A", "D"]

    def test_children_are_nested_by_level(self, nested_tree: SectionTree) -> None:
        a = nested_tree.top_level()[0]
        (b,) = nested_tree.children(a)
        (c,) = nested_tree.children(b)

        assert (a.level, b.level, c.level) == (1, 2, 3)
        assert b.title == "B"
        assert c.title == "C"

    def test_parent_back_references(self, nested_tree: SectionTree) -> None:
        a = nested_tree.top_level()[0]
        (b,) = nested_tree.children(a)

        assert nested_tree.parent(b) is a
        assert nested_tree.parent(a) is None

    def test_content_belongs_to_its_section(self, nested_tree: SectionTree) -> None:
        contents = {s.title: s.content for s in nested_tree}

        assert contents == {"A": "intro", "B": "bee", "C": "see", "D": "dee"}

    def test_spans(self, nested_tree: SectionTree) -> None:
        spans = {s.title: (s.start, s.end) for s in nested_tree}

        assert spans["A"] == (0, 29)
        assert spans["B"] == (10, 29)
        assert spans["C"] == (19, 29)
        assert spans["D"] == (29, len(NESTED))

    def test_child_span_within_parent_span(self, nested_tree: SectionTree) -> None:
        for section in nested_tree:
            parent = nested_tree.parent(section)
            if parent is None:
                continue
            assert parent.start <= section.start
            assert section.end <= parent.end

    def test_depth(self, nested_tree: SectionTree) -> None:
        assert nested_tree.depth() == 3


class TestDepthLimit:
    def test_levels_are_clamped_to_max_depth(self) -> None:
        tree = parse_sections("# A\n#### Deep\ntext", max_depth=2)

        deep = tree.children(tree.top_level()[0])[0]
        assert deep.level == 2

    def test_max_depth_sections_never_get_children(self) -> None:
        tree = parse_sections("# A\n## B\n## C\n### D\nbody", max_depth=2)

        a = tree.top_level()[0]
        assert [s.title for s in tree.children(a)] == ["B", "C", "D"]
        assert all(not s.children for s in tree.children(a))
        assert tree.depth() == 2

    def test_max_depth_one_keeps_sections_flat(self) -> None:
        tree = parse_sections("# A\naaa\n## B\nbbb", max_depth=1)

        assert [s.title for s in tree.top_level()] == ["A", "B"]
        assert [s.content for s in tree.top_level()] == ["aaa", "bbb"]

    def test_rejects_depth_below_one(self) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            parse_sections("# A", max_depth=0)


class TestRootSynthesis:
    def test_text_without_headers_becomes_single_root(self) -> None:
        text = "just some text\n\nand more"
        tree = parse_sections(text, max_depth=3)

        (root,) = tree.top_level()
        assert root.title == ROOT_TITLE
        assert root.level == 0
        assert (root.start, root.end) == (0, len(text))
        assert root.content == text

    def test_preamble_before_first_header_is_kept(self) -> None:
        tree = parse_sections("intro text\n# A\nbody", max_depth=3)

        roots = tree.top_level()
        assert [r.title for r in roots] == [ROOT_TITLE, "A"]
        assert roots[0].content == "intro text"
        assert (roots[0].start, roots[0].end) == (0, 11)

    def test_blank_preamble_is_ignored(self) -> None:
        tree = parse_sections("\n\n# A\nbody", max_depth=3)

        assert [r.title for r in tree.top_level()] == ["A"]

    def test_empty_text_has_no_sections(self) -> None:
        assert len(parse_sections("", max_depth=3)) == 0


class TestHeaderDetection:
    @pytest.mark.parametrize(
        "line",
        ["####### seven markers", "#no space", "#   ", "text # not a header"],
    )
    def test_non_headers_are_content(self, line: str) -> None:
        tree = parse_sections(line, max_depth=3)

        (root,) = tree.top_level()
        assert root.title == ROOT_TITLE

    def test_title_strips_markers(self) -> None:
        tree = parse_sections("###   Spaced Title  ", max_depth=3)

        assert tree.top_level()[0].title == "Spaced Title"

    def test_header_without_content_has_empty_content(self) -> None:
        tree = parse_sections("# Only\n# Headers", max_depth=3)

        assert [s.content for s in tree] == ["", ""]
