"""Theme preference routes."""

from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from userdirectory.api.dependencies.directory import get_theme_service
from userdirectory.services.theme import ThemeService

router = APIRouter()


class ThemeRequest(BaseModel):
    dark: bool


@router.get("", response_model=Dict[str, bool])
async def get_theme(theme: ThemeService = Depends(get_theme_service)) -> Dict[str, bool]:
    return {"dark": theme.is_dark()}


@router.put("", response_model=Dict[str, bool])
async def set_theme(
    body: ThemeRequest, theme: ThemeService = Depends(get_theme_service)
) -> Dict[str, bool]:
    return {"dark": theme.set_dark(body.dark)}


@router.post("/toggle", response_model=Dict[str, bool])
async def toggle_theme(theme: ThemeService = Depends(get_theme_service)) -> Dict[str, bool]:
    return {"dark": theme.toggle()}
