"""Tests for SkillLoader."""

from pathlib import Path

import pytest

from skillshelf.core.skill_loader import (
    ResourceNotFoundError,
    SkillDef,
    SkillLoader,
)
from skillshelf.utils.config import Config
from skillshelf.utils.def_loader import DefNotFoundError, InvalidDefError


@pytest.fixture
def loader(test_config: Config) -> SkillLoader:
    return SkillLoader.from_config(test_config)


class TestSkillLoaderDiscovery:
    """Tests for SkillLoader.discover_skills() method."""

    def test_discover_skills_sorted(self, sample_corpus: Path, loader: SkillLoader):
        result = loader.discover_skills()

        assert [s.id for s in result] == ["api-error-handling", "mysql-best-practices"]
        assert result[0].name == "api-error-handling"
        assert result[0].description == "Consistent JSON error responses for PHP APIs."
        assert result[0].path == "skills/api-error-handling/SKILL.md"

    def test_discover_skips_missing_fields(self, make_skill, loader: SkillLoader):
        make_skill("good")
        make_skill("no-desc", "---\nname: no-desc\n---\nBody\n")
        make_skill("blank-desc", "---\nname: blank-desc\ndescription: '  '\n---\n")

        assert [s.id for s in loader.discover_skills()] == ["good"]

    def test_discover_without_skills_dir(self, loader: SkillLoader):
        assert loader.discover_skills() == []


class TestSkillLoaderLoad:
    """Tests for SkillLoader.load_skill() method."""

    def test_load_skill_returns_full_content(
        self, sample_corpus: Path, loader: SkillLoader
    ):
        skill_def = loader.load_skill("api-error-handling")

        assert isinstance(skill_def, SkillDef)
        assert skill_def.id == "api-error-handling"
        assert skill_def.content.startswith("# API error handling")
        assert skill_def.line_count == 10

    def test_load_skill_lists_resources(self, sample_corpus: Path, loader: SkillLoader):
        skill_def = loader.load_skill("api-error-handling")

        by_path = {r.path: r for r in skill_def.resources}
        assert list(by_path) == [
            "examples/ApiClient.js",
            "references/ApiResponse.php",
            "references/exceptions.md",
        ]
        assert by_path["references/exceptions.md"].tier == 2
        assert by_path["references/exceptions.md"].line_count == 3
        assert by_path["references/ApiResponse.php"].line_count is None

    def test_load_skill_raises_not_found(self, skills_dir: Path, loader: SkillLoader):
        with pytest.raises(DefNotFoundError) as exc:
            loader.load_skill("nonexistent")

        assert exc.value.def_id == "nonexistent"

    def test_load_skill_without_skill_file(self, skills_dir: Path, loader: SkillLoader):
        (skills_dir / "empty").mkdir()

        with pytest.raises(DefNotFoundError):
            loader.load_skill("empty")

    @pytest.mark.parametrize("skill_id", ["../skills", "a/b", "."])
    def test_load_skill_rejects_paths(self, sample_corpus, loader, skill_id):
        with pytest.raises(DefNotFoundError):
            loader.load_skill(skill_id)

    def test_load_skill_without_frontmatter(self, make_skill, loader: SkillLoader):
        make_skill("plain", "# Just markdown\n")

        with pytest.raises(InvalidDefError) as exc:
            loader.load_skill("plain")

        assert exc.value.reason == "no valid frontmatter"

    def test_load_skill_with_bad_yaml(self, make_skill, loader: SkillLoader):
        make_skill("bad", "---\nname: [bad\n---\n")

        with pytest.raises(InvalidDefError) as exc:
            loader.load_skill("bad")

        assert "invalid YAML" in exc.value.reason

    def test_load_skill_missing_fields(self, make_skill, loader: SkillLoader):
        make_skill("partial", "---\nname: partial\ndescription: 42\n---\n")

        with pytest.raises(InvalidDefError) as exc:
            loader.load_skill("partial")

        assert "description" in exc.value.reason

    def test_load_skill_with_byte_order_mark(self, make_skill, loader: SkillLoader):
        skill_dir = make_skill("bom")
        (skill_dir / "SKILL.md").write_bytes(
            b"\xef\xbb\xbf---\nname: bom\ndescription: Saved by a Windows editor.\n---\n# Body\n"
        )

        skill = loader.load_skill("bom")

        assert skill.name == "bom"
        assert skill.content == "# Body"
        assert [s.id for s in loader.discover_skills()] == ["bom"]


class TestCustomRequiredFields:
    """name and description stay mandatory whatever lint.required_fields says."""

    @pytest.fixture
    def custom_loader(self, tmp_path: Path) -> SkillLoader:
        config = Config(
            workspace=tmp_path, lint={"required_fields": ["description", "owner"]}
        )
        return SkillLoader.from_config(config)

    def test_discover_skips_skill_without_name(self, make_skill, custom_loader):
        make_skill("owned", "---\nname: owned\ndescription: d\nowner: web\n---\n")
        make_skill("nameless", "---\ndescription: d\nowner: web\n---\n")

        assert [s.id for s in custom_loader.discover_skills()] == ["owned"]

    def test_discover_skips_skill_without_extra_field(self, make_skill, custom_loader):
        make_skill("unowned", "---\nname: unowned\ndescription: d\n---\n")

        assert custom_loader.discover_skills() == []

    def test_load_skill_without_name(self, make_skill, custom_loader):
        make_skill("nameless", "---\ndescription: d\nowner: web\n---\n")

        with pytest.raises(InvalidDefError) as exc:
            custom_loader.load_skill("nameless")

        assert "name" in exc.value.reason


class TestReadResource:
    def test_read_resource(self, sample_corpus: Path, loader: SkillLoader):
        text = loader.read_resource("api-error-handling", "references/ApiResponse.php")

        assert "final class ApiResponse" in text

    def test_missing_resource(self, sample_corpus: Path, loader: SkillLoader):
        with pytest.raises(ResourceNotFoundError):
            loader.read_resource("api-error-handling", "references/nope.md")

    def test_escaping_path_refused(self, sample_corpus: Path, loader: SkillLoader):
        with pytest.raises(ResourceNotFoundError):
            loader.read_resource(
                "api-error-handling", "../mysql-best-practices/SKILL.md"
            )

    def test_unknown_skill(self, sample_corpus: Path, loader: SkillLoader):
        with pytest.raises(DefNotFoundError):
            loader.read_resource("nope", "SKILL.md")
