"""Tests for splitting children into bare and section groups."""
from pageview.block import BareGroup, SectionGroup, flatten_groups, group_children


class TestGroupChildren:
    """Tests for group_children scenarios."""

    def test_headers_start_sections(self, blk, page_store):
        store = page_store(blk("h1", "header"), blk("x"), blk("y"), blk("h2", "header"), blk("z"))
        groups = group_children(["h1", "x", "y", "h2", "z"], store)

        assert groups == [
            SectionGroup("h1", ("h1", "x", "y")),
            SectionGroup("h2", ("h2", "z")),
        ]

    def test_no_headers_gives_bare_groups(self, blk, page_store):
        store = page_store(blk("x"), blk("y"), blk("z"))
        groups = group_children(["x", "y", "z"], store)

        assert groups == [BareGroup(("x",)), BareGroup(("y",)), BareGroup(("z",))]

    def test_content_before_first_header_is_bare(self, blk, page_store):
        store = page_store(blk("a"), blk("h", "header"), blk("b"))
        groups = group_children(["a", "h", "b"], store)

        assert groups == [BareGroup(("a",)), SectionGroup("h", ("h", "b"))]

    def test_adjacent_headers(self, blk, page_store):
        store = page_store(blk("h1", "header"), blk("h2", "header"))
        groups = group_children(["h1", "h2"], store)

        assert groups == [SectionGroup("h1", ("h1",)), SectionGroup("h2", ("h2",))]

    def test_only_header_type_opens_sections(self, blk, page_store):
        store = page_store(blk("s", "sub_header"), blk("x"))
        groups = group_children(["s", "x"], store)

        assert groups == [BareGroup(("s",)), BareGroup(("x",))]

    def test_wrapper_then_section(self, blk, page_store):
        store = page_store(blk("w", "wrapper_bulleted_list"), blk("h1", "header"), blk("x"))
        groups = group_children(["w", "h1", "x"], store)

        assert groups == [BareGroup(("w",)), SectionGroup("h1", ("h1", "x"))]

    def test_missing_ids_are_bare(self, blk, page_store):
        store = page_store(blk("h", "header"), blk("x"))
        groups = group_children(["ghost", "h", "ghost2", "x"], store)

        assert groups == [BareGroup(("ghost",)), SectionGroup("h", ("h", "ghost2", "x"))]

    def test_empty_children(self, page_store):
        assert group_children([], page_store()) == []


class TestFlattenGroups:
    """Tests that grouping never adds, drops, or reorders ids."""

    def test_flatten_restores_order(self, blk, page_store):
        store = page_store(
            blk("a"), blk("h1", "header"), blk("x"), blk("h2", "header"), blk("l", "wrapper_numbered_list"),
        )
        children = ["a", "h1", "x", "h2", "l"]
        assert flatten_groups(group_children(children, store)) == children

    def test_regrouping_flattened_output_is_stable(self, blk, page_store):
        store = page_store(blk("h1", "header"), blk("x"), blk("y"), blk("h2", "header"))
        children = ["x", "h1", "y", "h2"]

        groups = group_children(children, store)
        again = group_children(flatten_groups(groups), store)

        assert again == groups
        assert flatten_groups(again) == children
