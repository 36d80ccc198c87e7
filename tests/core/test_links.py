"""Tests for markdown link extraction."""

from pathlib import Path

import pytest

from skillshelf.core.links import Link, extract_links, local_path, resolve_link


class TestExtractLinks:
    def test_inline_and_image_links(self):
        text = "See [guide](references/guide.md) and ![diagram](assets/flow.png).\n"

        assert extract_links(text) == [
            Link("references/guide.md", 1),
            Link("assets/flow.png", 1),
        ]

    def test_title_and_angle_brackets(self):
        text = '[a](a.md "Title")\n[b](<docs/with space.md>)\n'

        assert [link.target for link in extract_links(text)] == [
            "a.md",
            "docs/with space.md",
        ]

    def test_reference_definitions(self):
        text = "Intro [schema][s].\n\n[s]: references/schema.sql\n"

        assert extract_links(text) == [Link("references/schema.sql", 3)]

    def test_ignores_fenced_code(self):
        text = (
            "[real](real.md)\n"
            "```php\n"
            "$x = [fake](fake.md);\n"
            "```\n"
            "~~~\n"
            "[also](fake.md)\n"
            "~~~\n"
            "[after](after.md)\n"
        )

        assert [link.target for link in extract_links(text)] == ["real.md", "after.md"]

    def test_fence_with_info_string_does_not_close(self):
        text = (
            "```markdown\n"
            "```php\n"
            "[x](missing.md)\n"
            "```\n"
            "[after](after.md)\n"
        )

        assert [link.target for link in extract_links(text)] == ["after.md"]

    def test_form_feed_keeps_line_numbers(self):
        text = "Intro\x0c\n[x](x.md)\n"

        assert extract_links(text) == [Link("x.md", 2)]

    def test_ignores_inline_code(self):
        assert extract_links("Use `[x](y.md)` syntax\n") == []

    def test_first_line_offset(self):
        assert extract_links("\n[x](x.md)\n", first_line=6) == [Link("x.md", 7)]


class TestLocalPath:
    @pytest.mark.parametrize(
        "target",
        ["https://example.com/a.md", "mailto:dev@example.com", "//cdn.example.com/x", "#section"],
    )
    def test_non_local_targets(self, target):
        assert local_path(target) is None

    def test_strips_fragment_and_query(self):
        assert local_path("references/api.md#errors") == "references/api.md"
        assert local_path("references/api.md?plain=1") == "references/api.md"

    def test_decodes_percent_escapes(self):
        assert local_path("docs/with%20space.md") == "docs/with space.md"


class TestResolveLink:
    def test_relative_to_source(self, tmp_path: Path):
        source = tmp_path / "skills" / "x" / "SKILL.md"

        assert resolve_link("references/a.md", source, tmp_path) == (
            tmp_path / "skills" / "x" / "references" / "a.md"
        ).resolve()

    def test_root_relative(self, tmp_path: Path):
        source = tmp_path / "skills" / "x" / "SKILL.md"

        assert resolve_link("/skills/y/SKILL.md", source, tmp_path) == (
            tmp_path / "skills" / "y" / "SKILL.md"
        ).resolve()

    def test_external_is_none(self, tmp_path: Path):
        assert resolve_link("https://example.com", tmp_path / "a.md", tmp_path) is None
