"""Single-purpose stages of the translate pipeline.

Each stage builds one prompt, makes exactly one model call and parses the
reply. Stages do not catch errors; a failing stage aborts the pipeline.
"""
from typing import Optional

from catvoice.core.logging import setup_logging
from catvoice.models.cat import (
    DEFAULT_TRANSLATE_MOOD,
    TRANSLATE_MOOD_FACES,
    CatProfile,
    TranslateMood,
)
from catvoice.models.content import ContentBlock, ImageBlock, TextBlock
from catvoice.models.translate import AnalysisResult, MoodResult, TranslationResult
from catvoice.services.model_client import ModelClient
from catvoice.services.parser import parse_response

logger = setup_logging("subagents")

_MOOD_GUIDE: dict[TranslateMood, str] = {
    TranslateMood.focused: "何かに夢中、狩猟本能",
    TranslateMood.clingy: "甘えたい、寂しい、構ってほしい",
    TranslateMood.indifferent: "興味なし、どうでもいい",
    TranslateMood.cheerful: "嬉しい、満足、楽しい",
    TranslateMood.anxious: "怖い、心配、パニック",
}


def _personality(cat: CatProfile) -> str:
    return cat.personality or "特になし"


def build_analysis_prompt(cat: CatProfile, text: str) -> str:
    """Prompt for a neutral analyst, not the cat itself."""
    return f"""猫の行動を客観的に分析してください。

猫の情報:
- 名前: {cat.name}
- 猫種: {cat.breed}
- 年齢: {cat.age}歳
- 性別: {cat.gender}
- 性格: {_personality(cat)}

飼い主からの相談: {text}

以下のJSON形式のみで回答してください:
{{"behavior": "観察された行動の客観的な説明", "context": "その行動が起きる一般的な文脈や理由"}}"""


def build_translation_prompt(cat: CatProfile, analysis: AnalysisResult) -> str:
    """Prompt asking the model to speak as the cat in first person."""
    return f"""あなたは猫の気持ちを翻訳する専門家です。以下の行動分析結果をもとに、猫の一人称（ニャ語）で気持ちを表現してください。

猫の情報:
- 名前: {cat.name}（{cat.breed}、{cat.age}歳、{cat.gender}）
- 性格: {_personality(cat)}

行動分析:
- 行動: {analysis.behavior}
- 文脈: {analysis.context}

ルール:
- 「〜ニャ」「〜だニャン」など猫語を使う
- 猫の性格や年齢を反映させる
- 2-3文程度

以下のJSON形式のみで回答してください:
{{"translation": "猫語での気持ち表現"}}"""


def build_mood_prompt(translation: str) -> str:
    """Prompt built from the translation text only."""
    moods = "\n".join(f"- {mood.value}: {desc}" for mood, desc in _MOOD_GUIDE.items())
    faces = "\n".join(f"- {mood.value}: {face}" for mood, face in TRANSLATE_MOOD_FACES.items())
    return f"""以下の猫語翻訳から、猫の気分を判定してください。

翻訳: {translation}

気分は以下の5種類から1つ選んでください:
{moods}

また、対応する顔文字も選んでください:
{faces}

以下のJSON形式のみで回答してください:
{{"mood": "気分", "face": "顔文字"}}"""


async def analyze_behavior(
    client: ModelClient,
    cat: CatProfile,
    text: str,
    image_base64: Optional[str] = None,
) -> AnalysisResult:
    """Stage 1: describe the behavior and its usual context.

    The optional photo is placed before the text prompt.
    """
    content: list[ContentBlock] = []
    if image_base64:
        content.append(ImageBlock(data=image_base64))
    content.append(TextBlock(text=build_analysis_prompt(cat, text)))

    raw = await client.generate(content, max_tokens=512)
    record = parse_response(raw, fields=("behavior", "context"))
    logger.debug("analysis: %.200s", record, extra={"stage": "analyze"})
    return AnalysisResult(**record)


async def translate_feeling(
    client: ModelClient,
    cat: CatProfile,
    analysis: AnalysisResult,
) -> TranslationResult:
    """Stage 2: voice the analysed behavior as the cat."""
    raw = await client.generate(
        [TextBlock(text=build_translation_prompt(cat, analysis))], max_tokens=512
    )
    record = parse_response(raw, fields=("translation",))
    return TranslationResult(**record)


async def judge_mood(client: ModelClient, translation: str) -> MoodResult:
    """Stage 3: classify the mood from the translation text alone.

    The face is always taken from the fixed table for the judged mood.
    """
    raw = await client.generate([TextBlock(text=build_mood_prompt(translation))], max_tokens=256)
    record = parse_response(
        raw,
        allowed_moods=TranslateMood,
        fallback_mood=DEFAULT_TRANSLATE_MOOD,
    )
    mood: TranslateMood = record["mood"]
    return MoodResult(mood=mood, face=TRANSLATE_MOOD_FACES[mood])
