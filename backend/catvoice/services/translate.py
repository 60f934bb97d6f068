"""TranslationService: orchestrates the three-stage translate pipeline."""
import time

from catvoice.core.logging import setup_logging
from catvoice.models.translate import TranslateInput, TranslateOutput
from catvoice.services.model_client import ModelClient
from catvoice.services.subagents import analyze_behavior, judge_mood, translate_feeling

logger = setup_logging("translate")


class TranslationService:
    """Chains behavior analysis → feeling translation → mood judgment.

    Each stage's prompt embeds the previous stage's output, so the three
    model calls always run one after another. Errors from any stage are
    propagated as-is and later stages are skipped.
    """

    def __init__(self, model_client: ModelClient) -> None:
        self.model_client = model_client

    async def orchestrate_translation(self, request: TranslateInput) -> TranslateOutput:
        """Run all three stages for one post.

        Args:
            request: Cat profile, the owner's text and an optional photo.

        Returns:
            TranslateOutput with the nested analysis and flattened mood fields.
        """
        _t0 = time.perf_counter()

        # --- 1. Behavior analysis ---
        analysis = await analyze_behavior(
            self.model_client, request.cat, request.text, request.image_base64
        )

        # --- 2. Feeling translation (depends on analysis) ---
        translated = await translate_feeling(self.model_client, request.cat, analysis)

        # --- 3. Mood judgment (depends on translation only) ---
        mood = await judge_mood(self.model_client, translated.translation)

        logger.info(
            "translate: cat=%s mood=%s",
            request.cat.name,
            mood.mood.value,
            extra={"elapsed_ms": int((time.perf_counter() - _t0) * 1000)},
        )
        return TranslateOutput(
            translation=translated.translation,
            mood=mood.mood,
            mood_face=mood.face,
            analysis=analysis,
        )
