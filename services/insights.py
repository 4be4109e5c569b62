"""
Keyword-triggered strategic findings.

Each rule fires when any of its trigger substrings appears anywhere in the
lowercased text of all answers. Rules are independent and keep table order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Sequence, Tuple

from services.responses import Response
from services.word_cloud import DEFAULT_WORD_LIMIT, WordCount, word_frequencies

NO_PRIORITIES_TEXT = "No specific priorities identified from responses"
NO_PITFALLS_TEXT = "No specific pitfalls identified from responses"


@dataclass(frozen=True)
class InsightRule:
    triggers: FrozenSet[str]
    message: str

    def matches(self, text: str) -> bool:
        return any(trigger in text for trigger in self.triggers)


def _rule(message: str, *triggers: str) -> InsightRule:
    return InsightRule(triggers=frozenset(triggers), message=message)


PRIORITY_RULES: Tuple[InsightRule, ...] = (
    _rule("Building deep sector capabilities and expertise", "capability", "expertise"),
    _rule("Strategic partnerships and acquisitions", "partnership", "acquisition"),
    _rule("Technology and digital transformation focus", "technology", "digital"),
    _rule("Long-term client relationship development", "client", "relationship"),
    _rule("Local market adaptation and relevance", "market", "local"),
)

PITFALL_RULES: Tuple[InsightRule, ...] = (
    _rule("Moving too slowly in a fast-evolving market", "slow", "late"),
    _rule("Failing to differentiate from competitors", "generic", "differentiate"),
    _rule("Insufficient investment in capabilities", "investment", "resource"),
    _rule("Gap between strategy and execution capabilities", "execution", "delivery"),
)


@dataclass
class InsightsSummary:
    """Derived view of a response list, rebuilt on every render"""
    response_count: int
    word_cloud: List[WordCount] = field(default_factory=list)
    priorities: List[str] = field(default_factory=list)
    pitfalls: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response_count": self.response_count,
            "word_cloud": [entry.to_dict() for entry in self.word_cloud],
            "priorities": self.priorities,
            "pitfalls": self.pitfalls,
        }


def combined_text(answers: Iterable[str]) -> str:
    return " ".join(answer.lower() for answer in answers)


def apply_rules(rules: Sequence[InsightRule], text: str) -> List[str]:
    return [rule.message for rule in rules if rule.matches(text)]


def summarize(responses: Sequence[Response], word_limit: int = DEFAULT_WORD_LIMIT) -> InsightsSummary:
    answers = [response.answer for response in responses]
    text = combined_text(answers)
    return InsightsSummary(
        response_count=len(responses),
        word_cloud=word_frequencies(answers, limit=word_limit),
        priorities=apply_rules(PRIORITY_RULES, text),
        pitfalls=apply_rules(PITFALL_RULES, text),
    )
