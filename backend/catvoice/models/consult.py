"""Data models for the single-call consultation feature."""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from catvoice.models.cat import CamelModel, ConsultMood

InputType = Literal["text", "photo", "video"]


class TextInput(CamelModel):
    """Consultation about a behavior described in words."""

    input_type: Literal["text"] = "text"
    input_text: str = Field(..., min_length=1)


class PhotoInput(CamelModel):
    """Consultation about a single photo, with an optional caption."""

    input_type: Literal["photo"] = "photo"
    image_base64: str = Field(..., min_length=1)
    input_text: Optional[str] = None


class VideoInput(CamelModel):
    """Consultation about frames sampled from a video, kept in temporal order."""

    input_type: Literal["video"] = "video"
    video_frames: list[str] = Field(..., min_length=1)
    input_text: Optional[str] = None


ConsultationInput = Annotated[
    Union[TextInput, PhotoInput, VideoInput],
    Field(discriminator="input_type"),
]


class ConsultResult(CamelModel):
    """Result of one consultation. Not persisted until the client saves it."""

    feeling: str
    explanation: str
    advice: str
    mood: ConsultMood
    mood_face: str


class ConsultRequest(CamelModel):
    """Request body for POST /api/consult.

    The payload fields are flat here to match the client. The router checks
    them against ``input_type`` and converts the body into a ConsultationInput
    variant before calling the consultant.
    """

    user_id: str = Field(..., min_length=1)
    cat_id: str = Field(..., min_length=1)
    input_type: InputType
    input_text: Optional[str] = None
    image_base64: Optional[str] = None
    video_frames: Optional[list[str]] = None

    def to_consultation_input(
        self, max_video_frames: int
    ) -> ConsultationInput:
        """Build the typed input variant.

        Raises:
            ValueError: When the payload does not match ``input_type``.
                The message is shown to the user as-is.
        """
        if self.input_type == "text":
            if not self.input_text:
                raise ValueError("テキストを入力してください")
            return TextInput(input_text=self.input_text)
        if self.input_type == "photo":
            if not self.image_base64:
                raise ValueError("写真を選択してください")
            return PhotoInput(image_base64=self.image_base64, input_text=self.input_text or None)
        if not self.video_frames:
            raise ValueError("動画を選択してください")
        if len(self.video_frames) > max_video_frames:
            raise ValueError(f"フレームは{max_video_frames}枚までです")
        return VideoInput(video_frames=self.video_frames, input_text=self.input_text or None)


class SaveConsultationRequest(CamelModel):
    """Request body for POST /api/consult/save."""

    user_id: str = Field(..., min_length=1)
    cat_id: str = Field(..., min_length=1)
    input_type: InputType
    input_text: Optional[str] = None
    media_url: Optional[str] = None
    # 0 is accepted and stored as no count
    frame_count: Optional[int] = Field(default=None, ge=0)
    feeling: str
    explanation: str
    advice: str
    mood: ConsultMood


class ConsultationRecord(CamelModel):
    """A saved consultation as stored in Firestore."""

    id: str
    user_id: str
    cat_id: str
    input_type: InputType
    input_text: Optional[str] = None
    media_url: Optional[str] = None
    frame_count: Optional[int] = None
    feeling: str
    explanation: str
    advice: str
    mood: ConsultMood
    created_at: datetime


class VideoCountResponse(CamelModel):
    """Response for GET /api/consult/video-count."""

    count: int
    limit: int
