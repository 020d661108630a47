"""Snippets API routes."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from insertive.app import Insertive
from insertive.constants import DEFAULT_ICON, SUGGESTION_PREVIEW_LENGTH
from insertive.features.search import preview, search

router = APIRouter(tags=["snippets"])


class AddSnippetRequest(BaseModel):
    key: str
    text: str
    icon: str = DEFAULT_ICON
    group: str = ""
    overwrite: bool = False


class UpdateSnippetRequest(BaseModel):
    key: str | None = None
    text: str | None = None
    icon: str | None = None
    group: str | None = None


class ReorderRequest(BaseModel):
    from_index: int
    to_index: int


class RenderRequest(BaseModel):
    selection: str = ""


def get_insertive(request: Request) -> Insertive:
    return request.app.state.insertive


@router.get("/snippets")
async def get_snippets(insertive: Insertive = Depends(get_insertive)) -> dict:
    """Get all snippets in order."""
    repo = insertive.repository
    return {
        "snippets": [asdict(record) for _, record in repo.list()],
        "groups": repo.groups(),
    }


@router.get("/search")
async def search_snippets(q: str = "", insertive: Insertive = Depends(get_insertive)) -> dict:
    """Quick search by key."""
    results = search(insertive.repository.list(), q)
    return {
        "results": [
            {"key": r.key, "preview": preview(r.text, SUGGESTION_PREVIEW_LENGTH)}
            for r in results
        ]
    }


@router.get("/snippets/{key}")
async def get_snippet(key: str, insertive: Insertive = Depends(get_insertive)) -> dict:
    return asdict(insertive.repository.get(key))


@router.post("/snippets", status_code=201)
async def add_snippet(
    req: AddSnippetRequest, insertive: Insertive = Depends(get_insertive)
) -> dict:
    """Add a snippet; ``overwrite`` confirms replacing an existing key."""
    repo = insertive.repository
    if req.overwrite:
        record = await repo.overwrite(req.key, req.text, icon=req.icon, group=req.group)
    else:
        record = await repo.add(req.key, req.text, icon=req.icon, group=req.group)
    return {"status": "ok", "message": f"Added snippet: {record.key}", "snippet": asdict(record)}


@router.put("/snippets/{key}")
async def update_snippet(
    key: str, req: UpdateSnippetRequest, insertive: Insertive = Depends(get_insertive)
) -> dict:
    """Edit or rename a snippet."""
    record = await insertive.repository.update(
        key, new_key=req.key, text=req.text, icon=req.icon, group=req.group
    )
    return {"status": "ok", "message": f"Updated snippet: {record.key}", "snippet": asdict(record)}


@router.delete("/snippets/{key}")
async def remove_snippet(key: str, insertive: Insertive = Depends(get_insertive)) -> dict:
    await insertive.repository.delete(key)
    return {"status": "ok", "message": f"Deleted snippet: {key}"}


@router.post("/snippets/reorder")
async def reorder_snippets(
    req: ReorderRequest, insertive: Insertive = Depends(get_insertive)
) -> dict:
    repo = insertive.repository
    await repo.reorder(req.from_index, req.to_index)
    return {"status": "ok", "order": repo.keys()}


@router.post("/snippets/{key}/render")
async def render_snippet(
    key: str, req: RenderRequest, insertive: Insertive = Depends(get_insertive)
) -> dict:
    """Apply a snippet to a selection, as its insert command would."""
    return {"key": key, "text": insertive.insert(key, req.selection)}


@router.get("/menu")
async def get_menu(insertive: Insertive = Depends(get_insertive)) -> dict:
    return insertive.menu().to_dict()
