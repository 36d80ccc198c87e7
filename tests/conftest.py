"""Shared test fixtures for skillshelf test suite."""

import logging
from pathlib import Path
from typing import Callable

import pytest

from skillshelf.core.context import SharedContext
from skillshelf.utils.config import Config

SkillFactory = Callable[..., Path]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers a CLI run attached to its captured streams."""
    yield
    logger = logging.getLogger("skillshelf")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def skill_text(name: str, description: str, body: str = "# Overview\n") -> str:
    return f"---\nname: {name}\ndescription: {description}\n---\n\n{body}"


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    return Config(workspace=tmp_path)


@pytest.fixture
def skills_dir(test_config: Config) -> Path:
    """Empty skills directory inside the workspace."""
    test_config.skills_path.mkdir(parents=True)
    return test_config.skills_path


@pytest.fixture
def make_skill(skills_dir: Path) -> SkillFactory:
    """Create a skill directory; `files` maps relative paths to content."""

    def _make(
        skill_id: str,
        content: str | None = None,
        files: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = skills_dir / skill_id
        skill_dir.mkdir(parents=True, exist_ok=True)
        if content is None:
            content = skill_text(skill_id, f"Use when working on {skill_id}.")
        (skill_dir / "SKILL.md").write_text(content)
        for rel, text in (files or {}).items():
            target = skill_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text)
        return skill_dir

    return _make


@pytest.fixture
def sample_corpus(make_skill: SkillFactory, skills_dir: Path) -> Path:
    """A small corpus that satisfies every convention."""
    make_skill(
        "api-error-handling",
        skill_text(
            "api-error-handling",
            "Consistent JSON error responses for PHP APIs.",
            "# API error handling\n\n"
            "- [Response envelope](references/ApiResponse.php)\n"
            "- [Exception mapping](references/exceptions.md)\n"
            "- [Client example](examples/ApiClient.js)\n",
        ),
        files={
            "references/ApiResponse.php": "<?php\nfinal class ApiResponse {}\n",
            "references/exceptions.md": "# Exceptions\n\nMap domain errors to HTTP codes.\n",
            "examples/ApiClient.js": "export class ApiClient {}\n",
        },
    )
    make_skill(
        "mysql-best-practices",
        skill_text(
            "mysql-best-practices",
            "Schema design, indexing and partitioning for multi-tenant MySQL.",
            "# MySQL\n\nSee [partitioning](references/partitioning.sql).\n",
        ),
        files={"references/partitioning.sql": "-- partition by tenant\n"},
    )
    return skills_dir


@pytest.fixture
def test_context(test_config: Config) -> SharedContext:
    """SharedContext with test config."""
    return SharedContext(config=test_config)
