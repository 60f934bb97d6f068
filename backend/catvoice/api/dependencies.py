"""FastAPI dependencies resolving services from app.state."""
from typing import Any

from fastapi import HTTPException, Request

from catvoice.services.consult import ConsultationService
from catvoice.services.datastore import DataStore
from catvoice.services.translate import TranslationService


def _from_state(request: Request, name: str) -> Any:
    svc = getattr(request.app.state, name, None)
    if svc is None:
        raise HTTPException(
            status_code=503,
            detail="Service unavailable. Not initialized.",
        )
    return svc


def get_translation_service(request: Request) -> TranslationService:
    """Return the TranslationService, or HTTP 503 if startup failed."""
    return _from_state(request, "translation_service")


def get_consultation_service(request: Request) -> ConsultationService:
    """Return the ConsultationService, or HTTP 503 if startup failed."""
    return _from_state(request, "consultation_service")


def get_datastore(request: Request) -> DataStore:
    """Return the Firestore-backed DataStore, or HTTP 503 if startup failed."""
    return _from_state(request, "datastore")
