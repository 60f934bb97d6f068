"""Firestore access for cats and saved consultations."""
import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from catvoice.models.cat import CatProfile
from catvoice.models.consult import ConsultationRecord, SaveConsultationRequest

logger = logging.getLogger(__name__)

CATS_COLLECTION = "cats"
CONSULTATIONS_COLLECTION = "consultations"


def start_of_day(now: datetime, tz: ZoneInfo) -> datetime:
    """Return local midnight of ``now`` in ``tz`` as an aware datetime."""
    local = now.astimezone(tz)
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


class DataStore:
    """Reads cat profiles and stores consultation history.

    Cat documents carry the owner's ``user_id`` next to the profile fields.
    Consultation documents are flat copies of ConsultationRecord.
    """

    def __init__(
        self,
        db: Optional[firestore.Client] = None,
        quota_timezone: str = "Asia/Tokyo",
    ) -> None:
        self._db = db if db is not None else firestore.Client()
        self._tz = ZoneInfo(quota_timezone)

    def get_cat(self, cat_id: str, user_id: str) -> Optional[CatProfile]:
        """Return the cat's profile if it exists and belongs to ``user_id``."""
        doc = self._db.collection(CATS_COLLECTION).document(cat_id).get()
        if not doc.exists:
            return None
        data = doc.to_dict() or {}
        if data.get("user_id") != user_id:
            logger.info("Cat %s requested by non-owner %s", cat_id, user_id)
            return None
        return CatProfile(
            name=data.get("name", ""),
            breed=data.get("breed", ""),
            age=data.get("age", 0),
            gender=data.get("gender", ""),
            personality=data.get("personality"),
        )

    def count_video_consultations_today(
        self, user_id: str, now: Optional[datetime] = None
    ) -> int:
        """Count the user's saved video consultations since local midnight."""
        since = start_of_day(now or datetime.now(timezone.utc), self._tz)
        query = (
            self._db.collection(CONSULTATIONS_COLLECTION)
            .where(filter=FieldFilter("user_id", "==", user_id))
            .where(filter=FieldFilter("input_type", "==", "video"))
            .where(filter=FieldFilter("created_at", ">=", since))
        )
        results = query.count(alias="all").get()
        if not results or not results[0]:
            return 0
        return int(results[0][0].value)

    def save_consultation(self, request: SaveConsultationRequest) -> ConsultationRecord:
        """Persist a consultation result chosen by the user."""
        doc_ref = self._db.collection(CONSULTATIONS_COLLECTION).document()
        data = {
            "user_id": request.user_id,
            "cat_id": request.cat_id,
            "input_type": request.input_type,
            "input_text": request.input_text or None,
            "media_url": request.media_url or None,
            "frame_count": request.frame_count or None,
            "feeling": request.feeling,
            "explanation": request.explanation,
            "advice": request.advice,
            "mood": request.mood.value,
            "created_at": datetime.now(timezone.utc),
        }
        doc_ref.set(data)
        return ConsultationRecord.model_validate({"id": doc_ref.id, **data})

    def list_consultations(self, user_id: str, limit: int = 50) -> list[ConsultationRecord]:
        """Return the user's consultations, newest first."""
        query = (
            self._db.collection(CONSULTATIONS_COLLECTION)
            .where(filter=FieldFilter("user_id", "==", user_id))
            .order_by("created_at", direction=firestore.Query.DESCENDING)
            .limit(limit)
        )
        return [
            ConsultationRecord.model_validate({"id": doc.id, **doc.to_dict()})
            for doc in query.stream()
        ]

    def delete_consultation(self, consultation_id: str, user_id: str) -> bool:
        """Delete a consultation owned by ``user_id``. Returns False if not found."""
        doc_ref = self._db.collection(CONSULTATIONS_COLLECTION).document(consultation_id)
        doc = doc_ref.get()
        if not doc.exists or (doc.to_dict() or {}).get("user_id") != user_id:
            return False
        doc_ref.delete()
        return True
