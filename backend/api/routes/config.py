"""Config API routes. Backend maintains settings.json; frontend fetches and overwrites on save."""

from fastapi import APIRouter, Body

from db import get_effective_settings, save_settings

router = APIRouter()


@router.get("")
async def get_config():
    """Return effective settings (defaults applied)."""
    config = await get_effective_settings()
    return {"config": config}


@router.post("")
async def save_config(body: dict = Body(...)):
    """Overwrite settings.json with request body."""
    await save_settings(body)
    return {"success": True}
