"""
Unit tests for slug generation
"""

import pytest

from catalog_service.app.utils.slug import generate_slug


class TestGenerateSlug:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Crèmes & Soins", "cremes-soins"),
            ("Hygiène", "hygiene"),
            ("  Baby Care  ", "baby-care"),
            ("Vitamins / Minerals", "vitamins-minerals"),
            ("Oral-care", "oral-care"),
            ("Été 2024", "ete-2024"),
        ],
    )
    def test_generate_slug(self, name, expected):
        assert generate_slug(name) == expected

    def test_generate_slug_is_idempotent(self):
        slug = generate_slug("Soins du Visage")
        assert generate_slug(slug) == slug

    def test_generate_slug_without_alphanumerics_is_empty(self):
        assert generate_slug("&&& ---") == ""
        assert generate_slug("") == ""

    def test_generate_slug_never_has_edge_or_double_hyphens(self):
        slug = generate_slug("--Dermo -- Cosmétique!!")
        assert slug == "dermo-cosmetique"
        assert "--" not in slug
