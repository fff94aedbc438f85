"""
Route de nettoyage des suggestions de mots-clés.
"""

from fastapi import APIRouter

from ...services.keyword_suggestions import clean_keyword_suggestions
from ..schemas import KeywordCleanRequest

router = APIRouter(prefix="/api/keywords", tags=["keywords"])


@router.post("/clean")
def clean_keywords(body: KeywordCleanRequest) -> dict:
    cleaned = clean_keyword_suggestions(body.existing, body.new, body.available)
    return {"existing": cleaned.existing, "new": cleaned.new}
