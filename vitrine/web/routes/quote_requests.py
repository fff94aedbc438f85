"""
Route publique de dépôt des demandes de soumission.
"""

import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from ...services.quote_intake import EMAIL_FAILED, MissingFieldsError
from ..deps import ContainerDep

router = APIRouter(prefix="/api/quote-requests", tags=["quote-requests"])


@router.post("")
async def submit_quote_request(request: Request, container: ContainerDep):
    """Enregistre une demande ; l'échec du courriel est signalé sans erreur."""
    try:
        payload = await request.json()
    except json.JSONDecodeError:
        return JSONResponse({"error": "invalid_json"}, status_code=400)
    if not isinstance(payload, dict):
        return JSONResponse({"error": "invalid_json"}, status_code=400)

    service = container.quote_intake_service()
    try:
        result = await service.submit(payload)
    except MissingFieldsError as e:
        return JSONResponse({"error": "missing_fields", "fields": e.missing}, status_code=400)
    except SQLAlchemyError as e:
        logger.error("Echec d'enregistrement de la demande", error=str(e))
        return JSONResponse({"error": "db_error"}, status_code=500)

    if result.email_status == EMAIL_FAILED:
        return {"ok": True, "email": EMAIL_FAILED}
    return {"ok": True}
