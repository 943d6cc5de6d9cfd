"""
Translation Scorer - 地名翻译质量评分（LLM 评审）

判断用户是否提到了非英文地名，以及助手是否使用了正确的英文译名。
"""

import json

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core.llm.gateway import LLMGateway
from core.scorers.base import BaseScorer, ScoreResult, ScorerRun, content_to_text
from utils.logging import get_logger

logger = get_logger(__name__)

JUDGE_INSTRUCTIONS = (
    "You are an expert evaluator of translation quality for geographic locations. "
    "Determine whether the user text mentions a non-English location and whether the "
    "assistant correctly uses an English translation of that location. Be lenient with "
    "transliteration differences and diacritics. Return only the structured JSON matching "
    "the provided schema."
)

_PROMPT_TEMPLATE = """You are evaluating if a weather assistant correctly handled translation of a non-English location.
User text:
\"\"\"
{user_text}
\"\"\"
Assistant response:
\"\"\"
{assistant_text}
\"\"\"
Tasks:
1) Identify if the user mentioned a location that appears non-English.
2) If non-English, check whether the assistant used a correct English translation of that location in its response.
3) Be lenient with transliteration differences (e.g., accents/diacritics).
Return JSON with fields:
{{
"nonEnglish": boolean,
"translated": boolean,
"confidence": number, // 0-1
"explanation": string
}}"""


class TranslationAnalysis(BaseModel):
    """评审模型的结构化输出"""

    non_english: bool = Field(alias="nonEnglish")
    translated: bool
    confidence: float = Field(default=1.0, ge=0, le=1)
    explanation: str = ""


def compute_translation_score(analysis: TranslationAnalysis) -> float:
    if not analysis.non_english:
        return 1.0
    if analysis.translated:
        return max(0.0, min(1.0, 0.7 + 0.3 * analysis.confidence))
    return 0.0


class TranslationScorer(BaseScorer):
    """翻译质量评分器"""

    id = "translation-quality"
    name = "Translation Quality"
    description = "Checks that non-English location names are translated and used correctly"

    def __init__(self, gateway: LLMGateway) -> None:
        self.gateway = gateway

    async def analyze(self, user_text: str, assistant_text: str) -> TranslationAnalysis:
        response = await self.gateway.chat(
            messages=[
                {"role": "system", "content": JUDGE_INSTRUCTIONS},
                {
                    "role": "user",
                    "content": _PROMPT_TEMPLATE.format(
                        user_text=user_text, assistant_text=assistant_text
                    ),
                },
            ],
            temperature=0,
            response_format={"type": "json_object"},
        )
        return TranslationAnalysis.model_validate(json.loads(response.content or "{}"))

    async def score(self, run: ScorerRun) -> ScoreResult:
        user_messages = [m for m in run.input_messages if m.get("role") == "user"]
        user_text = content_to_text(user_messages[0].get("content")) if user_messages else ""

        try:
            analysis = await self.analyze(user_text, run.output_text)
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning("Translation judge returned invalid JSON: %s", e)
            return ScoreResult(score=0.0, reason="Judge output could not be parsed")

        value = compute_translation_score(analysis)
        reason = (
            f"Translation scoring: nonEnglish={analysis.non_english}, "
            f"translated={analysis.translated}, confidence={analysis.confidence}. "
            f"Score={value}. {analysis.explanation}"
        )
        return ScoreResult(score=value, reason=reason.strip())
