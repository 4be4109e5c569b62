"""
Word cloud for workshop responses.

Plain frequency counting over all answers: no phrases, no clustering.
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List

DEFAULT_WORD_LIMIT = 20

STOP_WORDS = frozenset([
    'that', 'this', 'with', 'have', 'will', 'from', 'they', 'been', 'were',
    'said', 'each', 'which', 'their', 'would', 'there', 'could', 'other'
])

MIN_WORD_LENGTH = 4
MIN_FONT_PX = 14
MAX_FONT_PX = 24

# ASCII word characters only
_NON_WORD = re.compile(r"[^\w]", re.ASCII)


@dataclass
class WordCount:
    word: str
    count: int

    def to_dict(self) -> Dict[str, object]:
        return {"word": self.word, "count": self.count}


def _is_candidate(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS


def clean_and_tokenize(text: str) -> List[str]:
    """Lowercase, split on whitespace and strip non-word characters"""
    words = []
    for token in text.lower().split():
        if not _is_candidate(token):
            continue
        word = _NON_WORD.sub("", token)
        # stripping punctuation can turn "that," back into a stop word
        if word and _is_candidate(word):
            words.append(word)
    return words


def word_frequencies(answers: Iterable[str], limit: int = DEFAULT_WORD_LIMIT) -> List[WordCount]:
    """
    Top `limit` words across all answers, most frequent first.

    Ties keep no particular order.
    """
    all_text = " ".join(answers)
    word_counts = Counter(clean_and_tokenize(all_text))
    sorted_words = sorted(word_counts.items(), key=lambda x: x[1], reverse=True)
    return [WordCount(word=word, count=count) for word, count in sorted_words[:limit]]


def font_size(count: int) -> int:
    """Pixel size for a word cloud entry, 14px to 24px"""
    return max(MIN_FONT_PX, min(MAX_FONT_PX, MIN_FONT_PX + count * 2))
