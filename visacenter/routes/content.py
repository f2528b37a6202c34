# ========================================
# visacenter/routes/content.py - TRANSLATED UI STRINGS
# ========================================

from typing import Dict, List, Optional

from fastapi import APIRouter, Query

from visacenter.utils.translations import TRANSLATIONS, get_translations, navigation, resolve_language

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("/languages", response_model=List[str])
async def list_languages():
    return list(TRANSLATIONS)


@router.get("/translations")
async def translations(lang: Optional[str] = Query(None, description="Language code, e.g. en")):
    """UI strings for the navbar, footer and job board. Unknown languages get English."""
    return {"lang": resolve_language(lang), "strings": get_translations(lang)}


@router.get("/navigation", response_model=List[Dict[str, str]])
async def navigation_links(lang: Optional[str] = Query(None)):
    return navigation(lang)
