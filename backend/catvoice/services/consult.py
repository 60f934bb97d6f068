"""ConsultationService: one multi-modal model call per consultation."""

from catvoice.core.logging import setup_logging
from catvoice.models.cat import (
    CONSULT_MOOD_FACES,
    DEFAULT_CONSULT_MOOD,
    CatProfile,
    ConsultMood,
)
from catvoice.models.consult import ConsultationInput, ConsultResult, PhotoInput, TextInput
from catvoice.models.content import ContentBlock, ImageBlock, TextBlock
from catvoice.services.model_client import ModelClient
from catvoice.services.parser import parse_response

logger = setup_logging("consult")

PHOTO_DEFAULT_CAPTION = "この写真の猫の気持ちを教えてニャ"


def build_system_prompt(cat: CatProfile) -> str:
    """Build the role-play system prompt for the given cat.

    Includes the cat profile, the cat-speech rules, the JSON-only output
    format and the full list of allowed moods.
    """
    moods = ", ".join(mood.value for mood in ConsultMood)
    return f"""あなたは猫の気持ちを翻訳する専門家です。
ユーザーが飼い猫の行動について相談します。猫の一人称（ニャ語）で、その猫になりきって気持ちを伝えてください。

## 猫の情報
- 名前: {cat.name}
- 猫種: {cat.breed}
- 年齢: {cat.age}歳
- 性別: {cat.gender}
- 性格: {cat.personality or "特になし"}

## 回答ルール
1. 猫の一人称で話す（「〜ニャ」「〜だニャン」など猫語を使う）
2. その猫の性格や年齢を考慮して回答する
3. 以下のJSON形式で回答する:

```json
{{
  "feeling": "猫の気持ちを猫語で表現（2-3文）",
  "explanation": "飼い主向けの行動の説明（人間の言葉で）",
  "advice": "飼い主へのアドバイス（人間の言葉で）",
  "mood": "以下から1つ選択: {moods}"
}}
```

必ず上記のJSON形式のみで回答してください。JSON以外のテキストは含めないでください。"""


def build_user_content(
    consultation: ConsultationInput,
) -> list[ContentBlock]:
    """Lay out the user's media as ordered content blocks.

    - text:  [text]
    - photo: [image, caption]
    - video: [intro, frame_1 .. frame_n, supplement?]
    """
    if isinstance(consultation, TextInput):
        return [TextBlock(text=f"猫の行動: {consultation.input_text}")]

    if isinstance(consultation, PhotoInput):
        caption = (
            f"写真の猫の行動について: {consultation.input_text}"
            if consultation.input_text
            else PHOTO_DEFAULT_CAPTION
        )
        return [ImageBlock(data=consultation.image_base64), TextBlock(text=caption)]

    frames = consultation.video_frames
    blocks: list[ContentBlock] = [
        TextBlock(
            text=(
                f"以下は猫の動画から抽出した{len(frames)}枚のフレームです。"
                "動きのパターンから気持ちを読み取ってください。"
            )
        )
    ]
    blocks.extend(ImageBlock(data=frame) for frame in frames)
    if consultation.input_text:
        blocks.append(TextBlock(text=f"補足: {consultation.input_text}"))
    return blocks


class ConsultationService:
    """Single-call consultant.

    Unlike the translate pipeline, everything (feeling, explanation, advice
    and mood) comes back from one call, which keeps cost and latency flat
    for video frame batches.
    """

    def __init__(self, model_client: ModelClient) -> None:
        self.model_client = model_client

    async def perform_consultation(
        self,
        cat: CatProfile,
        consultation: ConsultationInput,
    ) -> ConsultResult:
        """Run one consultation.

        Args:
            cat: Profile of the cat being asked about.
            consultation: Typed text, photo or video input.

        Returns:
            ConsultResult whose mood always belongs to ConsultMood.

        Raises:
            GenerationFailedError: The model call failed.
            ResponseParseError: The reply held no usable JSON object.
        """
        raw = await self.model_client.generate(
            build_user_content(consultation),
            system_prompt=build_system_prompt(cat),
            max_tokens=1024,
        )
        record = parse_response(
            raw,
            fields=("feeling", "explanation", "advice"),
            allowed_moods=ConsultMood,
            fallback_mood=DEFAULT_CONSULT_MOOD,
        )
        mood: ConsultMood = record["mood"]
        logger.info(
            "consult: cat=%s input_type=%s mood=%s",
            cat.name,
            consultation.input_type,
            mood.value,
        )
        return ConsultResult(
            feeling=record["feeling"],
            explanation=record["explanation"],
            advice=record["advice"],
            mood=mood,
            mood_face=CONSULT_MOOD_FACES[mood],
        )
