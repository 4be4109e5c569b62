"""
Speculative strategy prompts shown on the workshop page.

The catalogue is static: defined once at import time and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Prompt:
    """One speculative question with its reflective follow-up"""
    id: str
    question: str
    reflection: str
    suggestions: Tuple[str, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "question": self.question,
            "reflection": self.reflection,
            "suggestions": list(self.suggestions),
        }


SPECULATIVE_PROMPTS: Tuple[Prompt, ...] = (
    Prompt(
        id="trust-mandate",
        question="Imagine we become the first consultancy to sign a 10-year transformation mandate with a leading energy company.",
        reflection="What would we have done differently today to earn that level of trust?",
        suggestions=(
            "Built deep sector expertise through strategic hires",
            "Developed proprietary energy transition frameworks",
            "Established long-term client partnerships",
            "Invested in energy-specific technology capabilities",
        ),
    ),
    Prompt(
        id="revenue-growth",
        question="Imagine our energy revenues surpass our traditional banking and finance practice by 2027.",
        reflection="What internal and external conditions must align for this to happen?",
        suggestions=(
            "Rapid energy market transformation creates demand",
            "Strategic acquisitions expand our capabilities",
            "Government policies accelerate clean energy adoption",
            "We develop unique IP in energy consulting",
        ),
    ),
    Prompt(
        id="lifecycle-delivery",
        question="What if client demand shifts towards full lifecycle delivery – from strategy to execution?",
        reflection="How do we reposition ourselves in the market?",
        suggestions=(
            "Build implementation capabilities internally",
            "Form strategic partnerships with execution specialists",
            "Acquire boutique implementation firms",
            "Develop hybrid consulting-execution models",
        ),
    ),
    Prompt(
        id="failure-scenario",
        question="It's 2028. We have shut down our energy consulting branch.",
        reflection="What went wrong? Were we too slow, too generic, too externally led, or too under-invested in local relevance?",
        suggestions=(
            "Failed to differentiate from competitors",
            "Underestimated local market dynamics",
            "Insufficient investment in talent and capabilities",
            "Misread the pace of market transformation",
        ),
    ),
    Prompt(
        id="market-volume",
        question="What if the market volume is smaller than expected?",
        reflection="How do we create a profitable model? How do we balance depth of engagement with the need for scale?",
        suggestions=(
            "Focus on high-value, premium engagements",
            "Develop scalable digital consulting products",
            "Create consortium-based delivery models",
            "Build recurring revenue through retainer relationships",
        ),
    ),
)


def prompts_as_dicts(prompts: Tuple[Prompt, ...] = SPECULATIVE_PROMPTS) -> List[Dict[str, object]]:
    return [prompt.to_dict() for prompt in prompts]
