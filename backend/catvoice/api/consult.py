"""Consult API router: single-call consultation and its saved history."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from starlette.concurrency import run_in_threadpool

from catvoice.api.dependencies import get_consultation_service, get_datastore
from catvoice.core.config import Settings, get_settings
from catvoice.models.consult import (
    ConsultationRecord,
    ConsultRequest,
    ConsultResult,
    SaveConsultationRequest,
    VideoCountResponse,
)
from catvoice.services.consult import ConsultationService
from catvoice.services.datastore import DataStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/consult", tags=["consult"])

CONSULT_FAILED = "翻訳に失敗しました。もう一度お試しください"


@router.post("", response_model=ConsultResult)
async def consult(
    body: ConsultRequest,
    service: ConsultationService = Depends(get_consultation_service),
    datastore: DataStore = Depends(get_datastore),
    settings: Settings = Depends(get_settings),
) -> ConsultResult:
    """Run a consultation. The result is returned but not saved.

    Checks run in this order, all before the model is called:
    payload matches inputType (400), video quota (429), cat ownership (404).

    Raises:
        HTTPException 400: Payload does not match inputType.
        HTTPException 429: Daily video consultation limit reached.
        HTTPException 404: Cat not found or not owned by the user.
        HTTPException 500: Any pipeline failure (details are only logged).
    """
    try:
        consultation = body.to_consultation_input(settings.max_video_frames)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        if consultation.input_type == "video":
            count = await run_in_threadpool(
                datastore.count_video_consultations_today, body.user_id
            )
            if count >= settings.video_consult_daily_limit:
                logger.info(
                    "Video consultation limit reached (%d)", count, extra={"user_id": body.user_id}
                )
                raise HTTPException(
                    status_code=429,
                    detail=f"動画相談は1日{settings.video_consult_daily_limit}回までです",
                )

        cat = await run_in_threadpool(datastore.get_cat, body.cat_id, body.user_id)
        if cat is None:
            raise HTTPException(status_code=404, detail="猫が見つかりません")

        return await service.perform_consultation(cat, consultation)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error(
            "consult failed",
            exc_info=True,
            extra={"user_id": body.user_id, "error_type": type(exc).__name__},
        )
        raise HTTPException(status_code=500, detail=CONSULT_FAILED) from exc


@router.post("/save", response_model=ConsultationRecord)
def save_consultation(
    body: SaveConsultationRequest,
    datastore: DataStore = Depends(get_datastore),
) -> ConsultationRecord:
    """Save a consultation result the user chose to keep."""
    try:
        return datastore.save_consultation(body)
    except Exception as exc:
        logger.error("save_consultation failed", exc_info=True, extra={"user_id": body.user_id})
        raise HTTPException(status_code=500, detail="保存に失敗しました") from exc


@router.get("/history", response_model=list[ConsultationRecord])
def get_history(
    user_id: str = Query(..., alias="userId", min_length=1),
    limit: int = Query(50, ge=1, le=200),
    datastore: DataStore = Depends(get_datastore),
) -> list[ConsultationRecord]:
    """List the user's saved consultations, newest first."""
    try:
        return datastore.list_consultations(user_id, limit)
    except Exception as exc:
        logger.error("get_history failed", exc_info=True, extra={"user_id": user_id})
        raise HTTPException(status_code=500, detail="履歴の取得に失敗しました") from exc


@router.delete("/history/{consultation_id}")
def delete_consultation(
    consultation_id: str,
    user_id: str = Query(..., alias="userId", min_length=1),
    datastore: DataStore = Depends(get_datastore),
) -> dict:
    """Delete one saved consultation owned by the user."""
    try:
        deleted = datastore.delete_consultation(consultation_id, user_id)
    except Exception as exc:
        logger.error("delete_consultation failed", exc_info=True, extra={"user_id": user_id})
        raise HTTPException(status_code=500, detail="削除に失敗しました") from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="相談が見つかりません")
    return {"success": True}


@router.get("/video-count", response_model=VideoCountResponse)
def get_video_count(
    user_id: str = Query(..., alias="userId", min_length=1),
    datastore: DataStore = Depends(get_datastore),
    settings: Settings = Depends(get_settings),
) -> VideoCountResponse:
    """Return how many video consultations the user has saved today."""
    try:
        count = datastore.count_video_consultations_today(user_id)
    except Exception as exc:
        logger.error("get_video_count failed", exc_info=True, extra={"user_id": user_id})
        raise HTTPException(status_code=500, detail="カウントの取得に失敗しました") from exc
    return VideoCountResponse(count=count, limit=settings.video_consult_daily_limit)
