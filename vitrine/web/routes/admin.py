"""
Routes d'administration (en-tête X-Admin-Token obligatoire).

Réglages des recommandations, répertoire des taxonomies, demandes de
soumission, publication et étiquetage des vidéos importées.
"""

import json

from fastapi import APIRouter, Depends, HTTPException, Request
from loguru import logger

from ...core.entities.taxonomy import Taxonomy
from ...infrastructure.persistence.settings_store import InvalidSettingsDocument
from ...utils.helpers import normalize_text
from ..deps import ContainerDep, require_admin
from ..schemas import (
    QuoteStatusUpdate,
    TaxonomyCreate,
    VideoTaxonomyLink,
    VideoUpdate,
    catalog_video_to_dict,
    quote_request_to_dict,
    taxonomy_to_dict,
    video_to_dict,
)

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/recommendations-settings")
def get_recommendations_settings(container: ContainerDep) -> dict:
    """Document de réglages courant (valeurs par défaut si absent)."""
    try:
        return container.settings_store().load_document()
    except (json.JSONDecodeError, InvalidSettingsDocument) as e:
        raise HTTPException(status_code=500, detail=f"Réglages illisibles: {e}") from e


@router.put("/recommendations-settings")
async def put_recommendations_settings(request: Request, container: ContainerDep) -> dict:
    """Remplace le document en entier ; seul un objet JSON est exigé."""
    try:
        document = await request.json()
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail="invalid_json") from e
    try:
        settings = container.settings_store().save(document)
    except InvalidSettingsDocument as e:
        raise HTTPException(status_code=400, detail="invalid_json") from e
    return settings.to_dict()


@router.get("/taxonomies")
def list_taxonomies(container: ContainerDep) -> list[dict]:
    return [taxonomy_to_dict(t) for t in container.taxonomy_repository().list_all()]


@router.post("/taxonomies", status_code=201)
def create_taxonomy(body: TaxonomyCreate, container: ContainerDep) -> dict:
    """Crée une taxonomie ; 409 si un libellé équivalent existe dans la catégorie."""
    label = body.label.strip()
    key = normalize_text(label)
    if not key:
        raise HTTPException(status_code=400, detail="empty_label")

    repository = container.taxonomy_repository()
    for existing in repository.list_all():
        if existing.kind == body.kind and normalize_text(existing.label) == key:
            raise HTTPException(status_code=409, detail="duplicate_taxonomy")

    taxonomy = repository.save(Taxonomy(kind=body.kind, label=label))
    logger.info("Taxonomie creee", taxonomy_id=taxonomy.id, kind=taxonomy.kind.value)
    return taxonomy_to_dict(taxonomy)


@router.delete("/taxonomies/{taxonomy_id}")
def delete_taxonomy(taxonomy_id: int, container: ContainerDep) -> dict:
    """Supprime une taxonomie et ses liens avec les vidéos."""
    if not container.taxonomy_repository().delete(taxonomy_id):
        raise HTTPException(status_code=404, detail="not_found")
    logger.info("Taxonomie supprimee", taxonomy_id=taxonomy_id)
    return {"ok": True}


@router.get("/quote-requests")
def list_quote_requests(container: ContainerDep) -> list[dict]:
    return [quote_request_to_dict(r) for r in container.quote_intake_service().list_requests()]


@router.patch("/quote-requests/{request_id}")
def update_quote_request(
    request_id: int, body: QuoteStatusUpdate, container: ContainerDep
) -> dict:
    updated = container.quote_intake_service().set_status(request_id, body.status)
    if updated is None:
        raise HTTPException(status_code=404, detail="not_found")
    return quote_request_to_dict(updated)


@router.get("/videos")
def list_videos(container: ContainerDep) -> list[dict]:
    """Catalogue complet, vidéos en attente de média comprises."""
    catalog = container.catalog_service().load_catalog(include_pending=True)
    return [catalog_video_to_dict(item) for item in catalog]


@router.patch("/videos/{video_id}")
def update_video(video_id: int, body: VideoUpdate, container: ContainerDep) -> dict:
    """
    Met à jour une vidéo importée.

    externalMediaId rattache le média hébergé : un identifiant définitif
    publie la vidéo, un marqueur "pending:" la remet en attente.
    """
    if body.is_featured is None and body.external_media_id is None:
        raise HTTPException(status_code=400, detail="empty_update")

    repository = container.video_repository()
    video = repository.get_by_id(video_id)
    if video is None:
        raise HTTPException(status_code=404, detail="not_found")
    if body.external_media_id is not None:
        video = repository.set_media(video_id, body.external_media_id)
        logger.info("Media rattache", video_id=video_id, status=video.status.value)
    if body.is_featured is not None:
        video = repository.set_featured(video_id, body.is_featured)
    return video_to_dict(video)


@router.post("/videos/{video_id}/taxonomies", status_code=201)
def link_taxonomy(video_id: int, body: VideoTaxonomyLink, container: ContainerDep) -> dict:
    """Associe une taxonomie à une vidéo (sans doublon)."""
    if container.video_repository().get_by_id(video_id) is None:
        raise HTTPException(status_code=404, detail="video_not_found")
    if container.taxonomy_repository().get_by_id(body.taxonomy_id) is None:
        raise HTTPException(status_code=404, detail="taxonomy_not_found")

    created = container.video_taxonomy_repository().add(video_id, body.taxonomy_id)
    if created:
        logger.info("Lien ajoute", video_id=video_id, taxonomy_id=body.taxonomy_id)
    return {"videoId": video_id, "taxonomyId": body.taxonomy_id, "created": created}


@router.delete("/videos/{video_id}/taxonomies/{taxonomy_id}")
def unlink_taxonomy(video_id: int, taxonomy_id: int, container: ContainerDep) -> dict:
    removed = container.video_taxonomy_repository().remove(video_id, taxonomy_id)
    if not removed:
        raise HTTPException(status_code=404, detail="not_found")
    logger.info("Lien supprime", video_id=video_id, taxonomy_id=taxonomy_id, rows=removed)
    return {"ok": True, "removed": removed}
