"""
Scorers - 评分器

- ToolCallAccuracyScorer / CompletenessScorer: 规则评分
- TranslationScorer: LLM 评审
"""

from core.scorers.base import BaseScorer, ScoreResult, ScorerBinding, ScorerRun, content_to_text
from core.scorers.code import CompletenessScorer, ToolCallAccuracyScorer, extract_terms
from core.scorers.translation import (
    TranslationAnalysis,
    TranslationScorer,
    compute_translation_score,
)

__all__ = [
    "BaseScorer",
    "CompletenessScorer",
    "ScoreResult",
    "ScorerBinding",
    "ScorerRun",
    "ToolCallAccuracyScorer",
    "TranslationAnalysis",
    "TranslationScorer",
    "compute_translation_score",
    "content_to_text",
    "extract_terms",
]
