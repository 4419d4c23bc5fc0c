"""Tests for slug generation and validation."""

import pytest

from blogforge.domain.slugs import is_valid_slug, slugify


class TestSlugify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Getting Started with Nuxt", "getting-started-with-nuxt"),
            ("  Hello,   World!  ", "hello-world"),
            ("Vue 3 & Nuxt 3", "vue-3-nuxt-3"),
            ("snake_case_title", "snake-case-title"),
            ("Already-a-slug", "already-a-slug"),
            ("Ｆｕｌｌｗｉｄｔｈ", "fullwidth"),
            ("مرحبا بالعالم", "مرحبا-بالعالم"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text: str, expected: str) -> None:
        assert slugify(text) == expected


class TestIsValidSlug:
    @pytest.mark.parametrize("slug", ["hello", "hello-world", "vue-3", "مرحبا-بالعالم"])
    def test_valid(self, slug: str) -> None:
        assert is_valid_slug(slug)

    @pytest.mark.parametrize(
        "slug", ["", "-hello", "hello-", "hello--world", "../etc", "a/b", "with space", "a_b"]
    )
    def test_invalid(self, slug: str) -> None:
        assert not is_valid_slug(slug)
