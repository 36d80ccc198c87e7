"""Lint report router."""

from fastapi import APIRouter, Depends, HTTPException

from skillshelf.api.deps import get_context
from skillshelf.core.context import SharedContext
from skillshelf.core.findings import LintReport
from skillshelf.utils.def_loader import DefNotFoundError

router = APIRouter()


@router.get("", response_model=LintReport)
def lint_corpus(ctx: SharedContext = Depends(get_context)) -> LintReport:
    """Lint the whole corpus."""
    return ctx.linter.lint()


@router.get("/{skill_id}", response_model=LintReport)
def lint_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> LintReport:
    """Lint one skill."""
    try:
        return ctx.linter.lint_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
