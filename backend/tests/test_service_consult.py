"""Tests for ConsultationService (single-call consultant)."""
import pytest

from catvoice.core.errors import InvalidJSONError, MalformedResponseError
from catvoice.models.cat import CONSULT_MOOD_FACES, CatProfile, ConsultMood
from catvoice.models.consult import PhotoInput, TextInput, VideoInput
from catvoice.models.content import ImageBlock, TextBlock
from catvoice.services.consult import (
    PHOTO_DEFAULT_CAPTION,
    ConsultationService,
    build_system_prompt,
    build_user_content,
)

REPLY = {
    "feeling": "それ、落としたら面白いニャ！",
    "explanation": "狩猟本能と好奇心からの行動です。",
    "advice": "割れ物はテーブルに置かないようにしましょう。",
    "mood": "興奮",
}


class TestBuildSystemPrompt:
    def test_includes_profile(self, cat: CatProfile) -> None:
        prompt = build_system_prompt(cat)
        for expected in ("Mochi", "Munchkin", "3歳", "female", "clingy"):
            assert expected in prompt

    def test_lists_all_ten_moods(self, cat: CatProfile) -> None:
        prompt = build_system_prompt(cat)
        for mood in ConsultMood:
            assert mood.value in prompt

    def test_requires_json_only(self, cat: CatProfile) -> None:
        prompt = build_system_prompt(cat)
        assert "JSON形式のみ" in prompt
        for field in ("feeling", "explanation", "advice", "mood"):
            assert f'"{field}"' in prompt


class TestBuildUserContent:
    def test_text(self) -> None:
        blocks = build_user_content(TextInput(input_text="knocks things off the table"))
        assert blocks == [TextBlock(text="猫の行動: knocks things off the table")]

    def test_photo_with_caption(self) -> None:
        blocks = build_user_content(PhotoInput(image_base64="cGhvdG8=", input_text="じっと見てる"))
        assert blocks == [
            ImageBlock(data="cGhvdG8="),
            TextBlock(text="写真の猫の行動について: じっと見てる"),
        ]

    def test_photo_without_caption_uses_default(self) -> None:
        blocks = build_user_content(PhotoInput(image_base64="cGhvdG8="))
        assert blocks[1] == TextBlock(text=PHOTO_DEFAULT_CAPTION)

    def test_video_keeps_frame_order_with_caption_last(self) -> None:
        blocks = build_user_content(VideoInput(video_frames=["f1", "f2", "f3"], input_text="hi"))

        assert [b.type for b in blocks] == ["text", "image", "image", "image", "text"]
        assert "3枚のフレーム" in blocks[0].text
        assert [b.data for b in blocks[1:4]] == ["f1", "f2", "f3"]
        assert blocks[4] == TextBlock(text="補足: hi")

    def test_video_without_caption_has_no_trailing_text(self) -> None:
        blocks = build_user_content(VideoInput(video_frames=["f1", "f2"]))
        assert [b.type for b in blocks] == ["text", "image", "image"]


class TestPerformConsultation:
    async def test_returns_result(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory(REPLY)
        result = await ConsultationService(client).perform_consultation(
            cat, TextInput(input_text="knocks things off the table")
        )

        assert result.feeling == REPLY["feeling"]
        assert result.explanation == REPLY["explanation"]
        assert result.advice == REPLY["advice"]
        assert result.mood is ConsultMood.excited
        assert result.mood_face == CONSULT_MOOD_FACES[ConsultMood.excited]

    async def test_single_call_with_system_prompt(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory(REPLY)
        await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))

        assert client.generate.await_count == 1
        call = client.generate.call_args
        assert "Mochi" in call.kwargs["system_prompt"]
        assert call.kwargs["max_tokens"] == 1024

    async def test_video_frames_sent_in_one_call(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory(REPLY)
        frames = [f"frame{i}" for i in range(10)]
        await ConsultationService(client).perform_consultation(cat, VideoInput(video_frames=frames))

        content = client.generate.call_args.args[0]
        assert [b.data for b in content if b.type == "image"] == frames

    async def test_out_of_enum_mood_falls_back(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory({**REPLY, "mood": "purple"})
        result = await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))
        assert result.mood is ConsultMood.cheerful
        assert result.mood_face == "^_^"

    async def test_fenced_reply_is_accepted(self, cat: CatProfile, model_client_factory) -> None:
        import json

        fenced = f"はい！\n```json\n{json.dumps(REPLY, ensure_ascii=False)}\n```"
        client = model_client_factory(fenced)
        result = await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))
        assert result.mood is ConsultMood.excited

    async def test_missing_fields_default_to_empty(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory({"feeling": "ニャ", "mood": "眠い"})
        result = await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))
        assert result.explanation == ""
        assert result.advice == ""

    async def test_malformed_reply_raises(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory("ごめんなさい、わかりません")
        with pytest.raises(MalformedResponseError):
            await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))

    async def test_invalid_json_raises(self, cat: CatProfile, model_client_factory) -> None:
        client = model_client_factory("{feeling: ニャ}")
        with pytest.raises(InvalidJSONError):
            await ConsultationService(client).perform_consultation(cat, TextInput(input_text="x"))
