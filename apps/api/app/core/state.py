from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.services.image_store import ImageStore
from app.services.translations import TranslationStore


def get_translations(request: Request) -> TranslationStore:
    return request.app.state.translations


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store


TranslationsDep = Annotated[TranslationStore, Depends(get_translations)]
ImageStoreDep = Annotated[ImageStore, Depends(get_image_store)]
