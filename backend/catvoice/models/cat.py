"""Cat profile and mood vocabularies."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON while accepting snake_case names too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CatProfile(CamelModel):
    """Static attributes of a cat used to personalize prompts."""

    model_config = ConfigDict(frozen=True)

    name: str
    breed: str
    age: int = Field(..., ge=0)
    gender: str
    personality: Optional[str] = None


class TranslateMood(str, Enum):
    """Moods returned by the quick three-stage translator."""

    focused = "集中"
    clingy = "甘え"
    indifferent = "無関心"
    cheerful = "ごきげん"
    anxious = "不安"


class ConsultMood(str, Enum):
    """Moods returned by the single-call consultant."""

    cheerful = "ご機嫌"
    relaxed = "リラックス"
    wants_affection = "甘えたい"
    anxious = "不安"
    irritated = "イライラ"
    excited = "興奮"
    wary = "警戒"
    bored = "退屈"
    sleepy = "眠い"
    hungry = "お腹すいた"


TRANSLATE_MOOD_FACES: dict[TranslateMood, str] = {
    TranslateMood.focused: ">w<",
    TranslateMood.clingy: "^w^",
    TranslateMood.indifferent: "-_-",
    TranslateMood.cheerful: "^_^",
    TranslateMood.anxious: "O_O",
}

CONSULT_MOOD_FACES: dict[ConsultMood, str] = {
    ConsultMood.cheerful: "^_^",
    ConsultMood.relaxed: "-w-",
    ConsultMood.wants_affection: "^w^",
    ConsultMood.anxious: "O_O",
    ConsultMood.irritated: ">_<",
    ConsultMood.excited: ">w<",
    ConsultMood.wary: "o_o",
    ConsultMood.bored: "-_-",
    ConsultMood.sleepy: "=w=",
    ConsultMood.hungry: "T_T",
}

DEFAULT_TRANSLATE_MOOD = TranslateMood.cheerful
DEFAULT_CONSULT_MOOD = ConsultMood.cheerful
