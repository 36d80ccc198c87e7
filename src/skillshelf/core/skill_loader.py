"""Skill loader for discovering and loading skills."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict

from skillshelf.utils.def_loader import (
    DefNotFoundError,
    InvalidDefError,
    InvalidFrontmatterError,
    count_lines,
    discover_definitions,
    parse_frontmatter,
)

if TYPE_CHECKING:
    from skillshelf.utils.config import Config

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
# Catalog entries are built from these, whatever else config requires
CATALOG_FIELDS = ("name", "description")
MARKDOWN_SUFFIXES = (".md", ".markdown")

# Alias for callers that only care about skills
SkillNotFoundError = DefNotFoundError


class ResourceNotFoundError(Exception):
    """Resource file is missing or lies outside its skill directory."""

    def __init__(self, skill_id: str, path: str):
        super().__init__(f"Resource not found in skill '{skill_id}': {path}")
        self.skill_id = skill_id
        self.path = path


class ResourceInfo(BaseModel):
    """A file bundled in one of a skill's resource subdirectories."""

    model_config = ConfigDict(extra="forbid")

    path: str
    tier: int | None = None
    line_count: int | None = None


class SkillMetadata(BaseModel):
    """Lightweight skill info for discovery."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    description: str
    path: str


class SkillDef(SkillMetadata):
    """Loaded skill definition."""

    content: str
    line_count: int
    resources: list[ResourceInfo] = []


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


def missing_fields(frontmatter: dict[str, Any], required: list[str]) -> list[str]:
    """Required fields that are absent, blank, or not strings."""
    missing = []
    for field in required:
        value = frontmatter.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


class SkillLoader:
    """Load and manage skill definitions from filesystem."""

    @staticmethod
    def from_config(config: "Config") -> "SkillLoader":
        """Create SkillLoader from config."""
        return SkillLoader(
            config.skills_path,
            required_fields=config.lint.required_fields,
            workspace=config.workspace,
        )

    def __init__(
        self,
        skills_path: Path,
        required_fields: list[str] | None = None,
        workspace: Path | None = None,
    ):
        self.skills_path = skills_path
        self.required_fields = required_fields or list(CATALOG_FIELDS)
        self._checked_fields = list(
            dict.fromkeys([*CATALOG_FIELDS, *self.required_fields])
        )
        self.workspace = workspace or skills_path.parent

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.workspace).as_posix()
        except ValueError:
            return path.as_posix()

    def discover_skills(self) -> list[SkillMetadata]:
        """Scan skills directory and return list of valid SkillMetadata."""
        return discover_definitions(
            self.skills_path, SKILL_FILENAME, self._parse_skill_metadata
        )

    def _parse_skill_metadata(
        self, def_id: str, frontmatter: dict[str, Any], body: str
    ) -> Optional[SkillMetadata]:
        """Parse skill metadata from frontmatter (callback for discover_definitions)."""
        missing = missing_fields(frontmatter, self._checked_fields)
        if missing:
            logger.warning(
                f"Missing required fields in skill '{def_id}': {', '.join(missing)}"
            )
            return None

        return SkillMetadata(
            id=def_id,
            name=frontmatter["name"].strip(),
            description=frontmatter["description"].strip(),
            path=self._relative(self.skills_path / def_id / SKILL_FILENAME),
        )

    def _skill_dir(self, skill_id: str) -> Path:
        # Skill ids are directory names, never paths
        if not skill_id or "/" in skill_id or "\\" in skill_id or skill_id in (".", ".."):
            raise DefNotFoundError("skill", skill_id)

        skill_dir = self.skills_path / skill_id
        if not skill_dir.is_dir():
            raise DefNotFoundError("skill", skill_id)
        return skill_dir

    def load_skill(self, skill_id: str) -> SkillDef:
        """Load full skill definition by ID.

        Args:
            skill_id: The skill directory name

        Returns:
            SkillDef with full content and its resource listing

        Raises:
            SkillNotFoundError: If skill doesn't exist
            InvalidDefError: If skill is invalid (malformed, missing fields)
        """
        skill_dir = self._skill_dir(skill_id)
        skill_file = skill_dir / SKILL_FILENAME
        if not skill_file.is_file():
            raise DefNotFoundError("skill", skill_id)

        try:
            content = skill_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDefError("skill", skill_id, f"not UTF-8 text: {e}") from e

        try:
            frontmatter, body = parse_frontmatter(content)
        except InvalidFrontmatterError as e:
            raise InvalidDefError("skill", skill_id, e.reason) from e

        if not frontmatter:
            raise InvalidDefError("skill", skill_id, "no valid frontmatter")

        missing = missing_fields(frontmatter, self._checked_fields)
        if missing:
            raise InvalidDefError(
                "skill", skill_id, f"missing required fields: {', '.join(missing)}"
            )

        return SkillDef(
            id=skill_id,
            name=frontmatter["name"].strip(),
            description=frontmatter["description"].strip(),
            path=self._relative(skill_file),
            content=body.strip(),
            line_count=count_lines(content),
            resources=self.list_resources(skill_id),
        )

    def list_resources(self, skill_id: str) -> list[ResourceInfo]:
        """List files in the skill's subdirectories, sorted by path."""
        skill_dir = self._skill_dir(skill_id)

        resources = []
        for path in sorted(skill_dir.rglob("*")):
            rel = path.relative_to(skill_dir)
            if not path.is_file() or len(rel.parts) < 2:
                continue
            if any(part.startswith(".") for part in rel.parts):
                continue

            if is_markdown(path):
                try:
                    lines = count_lines(path.read_text(encoding="utf-8"))
                except (OSError, UnicodeDecodeError) as e:
                    logger.warning(f"Cannot read {self._relative(path)}: {e}")
                    lines = None
                resources.append(
                    ResourceInfo(path=rel.as_posix(), tier=2, line_count=lines)
                )
            else:
                resources.append(ResourceInfo(path=rel.as_posix()))
        return resources

    def resolve_resource(self, skill_id: str, relpath: str) -> Path:
        """Resolve a resource path, refusing anything outside the skill dir."""
        skill_dir = self._skill_dir(skill_id).resolve()
        target = (skill_dir / relpath).resolve()
        if not target.is_relative_to(skill_dir) or target == skill_dir:
            raise ResourceNotFoundError(skill_id, relpath)
        if not target.is_file():
            raise ResourceNotFoundError(skill_id, relpath)
        return target

    def read_resource(self, skill_id: str, relpath: str) -> str:
        """Return the text of a file bundled with a skill.

        Raises:
            SkillNotFoundError: If skill doesn't exist
            ResourceNotFoundError: If the file is missing or escapes the skill
        """
        target = self.resolve_resource(skill_id, relpath)
        try:
            return target.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ResourceNotFoundError(skill_id, relpath) from e
