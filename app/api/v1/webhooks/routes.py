"""
Routes FastAPI pour le module Webhooks.

Endpoints pour :
- /webhooks/clerk : Synchronisation des utilisateurs depuis Clerk

Pas d'authentification Bearer : la requête est authentifiée par sa
signature Svix. Le corps brut est lu avant tout parsing (la signature
porte sur les octets exacts).
"""
from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.v1.dependencies import get_webhook_service
from app.api.v1.webhooks.schemas import WebhookResponse
from app.api.v1.webhooks.services import WebhookService
from app.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    WebhookVerificationError,
)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


async def get_raw_body(request: Request) -> bytes:
    """Corps brut de la requête."""
    return await request.body()


@router.post("/clerk", response_model=WebhookResponse)
def clerk_webhook(
        request: Request,
        payload: bytes = Depends(get_raw_body),
        service: WebhookService = Depends(get_webhook_service),
):
    """
    Reçoit un webhook Clerk (user.created, user.updated, user.deleted).

    - 401 si la signature, les en-têtes ou l'horodatage sont invalides
    - 200 avec status=ignored pour un type d'événement non géré
    - 200 avec status=duplicate pour une relivraison déjà traitée
    """
    try:
        event = service.verify_webhook(payload, request.headers)
    except WebhookVerificationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

    try:
        outcome = service.process_webhook(event)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

    return WebhookResponse(status=outcome, event_id=event.id, event_type=event.type)
