"""
Unit tests for grouping stored categories into the two-level tree
"""

from datetime import datetime

from catalog_service.app.models.category import Category
from catalog_service.app.services.category_service import build_category_tree


def _row(category_id, name, parent_id=None, product_count=0):
    now = datetime(2024, 1, 1, 12, 0, 0)
    return Category(
        id=category_id,
        name=name,
        slug=name.lower(),
        description="",
        parent_id=parent_id,
        product_count=product_count,
        image="/pharmacy-category.jpg",
        created_at=now,
        updated_at=now,
    )


class TestBuildCategoryTree:
    def test_groups_subcategories_under_their_parent(self):
        rows = [
            _row("m1", "Hygiene"),
            _row("s1", "Creams", parent_id="m1", product_count=3),
            _row("m2", "Vitamins"),
            _row("s2", "Soaps", parent_id="m1"),
        ]

        tree = build_category_tree(rows)

        assert [node.id for node in tree] == ["m1", "m2"]
        assert [child.id for child in tree[0].children] == ["s1", "s2"]
        assert tree[0].children[0].product_count == 3
        assert tree[1].children == []

    def test_only_main_categories_at_top_level(self):
        rows = [_row("s1", "Creams", parent_id="m1"), _row("m1", "Hygiene")]

        tree = build_category_tree(rows)

        assert len(tree) == 1
        assert tree[0].parent_id is None
        assert tree[0].children[0].parent_id == "m1"

    def test_orphans_and_third_level_rows_are_skipped(self):
        rows = [
            _row("m1", "Hygiene"),
            _row("s1", "Creams", parent_id="m1"),
            _row("x1", "Lost", parent_id="missing"),
            _row("x2", "Too deep", parent_id="s1"),
        ]

        tree = build_category_tree(rows)

        assert [node.id for node in tree] == ["m1"]
        assert [child.id for child in tree[0].children] == ["s1"]

    def test_empty_input(self):
        assert build_category_tree([]) == []

    def test_nodes_serialize_with_camel_case_keys(self):
        tree = build_category_tree(
            [_row("m1", "Hygiene"), _row("s1", "Creams", parent_id="m1")]
        )

        data = tree[0].model_dump(by_alias=True)

        assert data["parentId"] is None
        assert data["productCount"] == 0
        assert data["children"][0]["parentId"] == "m1"
        assert "createdAt" in data and "updatedAt" in data
