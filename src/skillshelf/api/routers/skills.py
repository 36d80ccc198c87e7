"""Skill resource router."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from skillshelf.api.deps import get_context
from skillshelf.core.context import SharedContext
from skillshelf.core.skill_loader import ResourceNotFoundError, SkillDef, SkillMetadata
from skillshelf.utils.def_loader import DefNotFoundError, InvalidDefError

router = APIRouter()


@router.get("", response_model=list[SkillMetadata])
def list_skills(ctx: SharedContext = Depends(get_context)) -> list[SkillMetadata]:
    """List all valid skills."""
    return ctx.skill_loader.discover_skills()


@router.get("/{skill_id}", response_model=SkillDef)
def get_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> SkillDef:
    """Get skill by ID."""
    try:
        return ctx.skill_loader.load_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{skill_id}/resources/{path:path}", response_class=PlainTextResponse)
def get_resource(
    skill_id: str, path: str, ctx: SharedContext = Depends(get_context)
) -> str:
    """Get the text of a file bundled with a skill."""
    try:
        return ctx.skill_loader.read_resource(skill_id, path)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
