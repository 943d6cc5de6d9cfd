"""
Code Scorers - 基于规则的评分器

- ToolCallAccuracyScorer: 是否调用了预期工具
- CompletenessScorer: 输出对输入要点的覆盖率
"""

import re

from core.scorers.base import BaseScorer, ScoreResult, ScorerRun, content_to_text

_WORD_PATTERN = re.compile(r"\w+", re.UNICODE)

_STOPWORDS = frozenset(
    {
        "the", "and", "for", "are", "but", "not", "you", "your", "with", "what",
        "how", "who", "can", "could", "would", "should", "this", "that", "there",
        "about", "from", "have", "has", "was", "were", "will", "please", "tell",
        "give", "any", "some", "like", "into", "its", "it's", "our", "out",
    }
)  # fmt: skip


class ToolCallAccuracyScorer(BaseScorer):
    """工具调用准确性

    strict_mode=False 时只要调用过预期工具即得 1 分；
    strict_mode=True 时要求只调用了预期工具。
    """

    id = "tool-call-accuracy"
    name = "Tool Call Accuracy"
    description = "Checks that the expected tool was called"

    def __init__(self, expected_tool: str, strict_mode: bool = False) -> None:
        self.expected_tool = expected_tool
        self.strict_mode = strict_mode

    async def score(self, run: ScorerRun) -> ScoreResult:
        called = [tc.name for tc in run.tool_calls]
        if not called:
            return ScoreResult(score=0.0, reason="No tools were called")

        if self.strict_mode:
            ok = set(called) == {self.expected_tool}
        else:
            ok = self.expected_tool in called

        reason = f"Expected {self.expected_tool}, called {', '.join(called)}"
        return ScoreResult(score=1.0 if ok else 0.0, reason=reason)


def extract_terms(text: str) -> set[str]:
    """抽取内容词：小写、长度 >= 3、去停用词"""
    return {
        word
        for word in _WORD_PATTERN.findall(text.lower())
        if len(word) >= 3 and word not in _STOPWORDS and not word.isdigit()
    }


class CompletenessScorer(BaseScorer):
    """输入要点在输出中的覆盖率"""

    id = "completeness"
    name = "Completeness"
    description = "Measures how many input terms are covered by the output"

    async def score(self, run: ScorerRun) -> ScoreResult:
        input_text = " ".join(
            content_to_text(m.get("content"))
            for m in run.input_messages
            if m.get("role") == "user"
        )
        terms = extract_terms(input_text)
        if not terms:
            return ScoreResult(score=1.0, reason="Input has no content terms")

        output_terms = extract_terms(run.output_text)
        covered = terms & output_terms
        missing = sorted(terms - covered)
        value = len(covered) / len(terms)
        reason = f"Covered {len(covered)}/{len(terms)} terms"
        if missing:
            reason += f"; missing: {', '.join(missing[:10])}"
        return ScoreResult(score=round(value, 4), reason=reason)
