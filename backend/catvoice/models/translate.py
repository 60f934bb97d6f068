"""Data models for the three-stage translate pipeline."""
from typing import Optional

from pydantic import BaseModel, Field

from catvoice.models.cat import CamelModel, CatProfile, TranslateMood


class AnalysisResult(CamelModel):
    """Stage 1 output: objective description of the behavior."""

    behavior: str = ""
    context: str = ""


class TranslationResult(BaseModel):
    """Stage 2 output: the feeling voiced by the cat."""

    translation: str = ""


class MoodResult(BaseModel):
    """Stage 3 output: mood judged from the translation alone."""

    mood: TranslateMood
    face: str


class TranslateInput(BaseModel):
    """Everything the translator needs for one request."""

    cat: CatProfile
    text: str
    image_base64: Optional[str] = None


class TranslateOutput(CamelModel):
    """Merged result of all three stages returned to the client."""

    translation: str
    mood: TranslateMood
    mood_face: str
    analysis: AnalysisResult


class TranslateRequest(CamelModel):
    """Request body for POST /api/translate."""

    user_id: str = Field(..., min_length=1)
    cat_id: str = Field(..., min_length=1)
    text: str = Field(..., min_length=1, max_length=2000)
    image_base64: Optional[str] = None
