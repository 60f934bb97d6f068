"""Translate API router: quick per-post feeling translation."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from catvoice.api.dependencies import get_datastore, get_translation_service
from catvoice.models.translate import TranslateInput, TranslateOutput, TranslateRequest
from catvoice.services.datastore import DataStore
from catvoice.services.translate import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/translate", tags=["translate"])

TRANSLATE_FAILED = "翻訳に失敗しました。もう一度お試しください"


@router.post("", response_model=TranslateOutput)
async def translate(
    body: TranslateRequest,
    service: TranslationService = Depends(get_translation_service),
    datastore: DataStore = Depends(get_datastore),
) -> TranslateOutput:
    """Translate what the user's cat is feeling.

    Raises:
        HTTPException 400: Cat not found or not owned by the user.
        HTTPException 500: Any pipeline failure (details are only logged).
        HTTPException 422: Validation error (handled by FastAPI automatically).
    """
    try:
        cat = await run_in_threadpool(datastore.get_cat, body.cat_id, body.user_id)
    except Exception as exc:
        logger.error("Cat lookup failed", exc_info=True, extra={"user_id": body.user_id})
        raise HTTPException(status_code=500, detail=TRANSLATE_FAILED) from exc
    if cat is None:
        raise HTTPException(status_code=400, detail="猫が見つかりません")

    try:
        return await service.orchestrate_translation(
            TranslateInput(cat=cat, text=body.text, image_base64=body.image_base64)
        )
    except Exception as exc:
        logger.error(
            "translate failed",
            exc_info=True,
            extra={"user_id": body.user_id, "error_type": type(exc).__name__},
        )
        raise HTTPException(status_code=500, detail=TRANSLATE_FAILED) from exc
