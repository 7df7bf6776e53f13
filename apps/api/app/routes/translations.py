from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from app.core.state import TranslationsDep

router = APIRouter()


@router.get("/translations")
async def get_translations(
    translations: TranslationsDep, lang: str | None = None
) -> dict[str, Any]:
    return translations.for_language(lang)


@router.get("/translations/all")
async def get_all_translations(translations: TranslationsDep) -> dict[str, Any]:
    return translations.all()
