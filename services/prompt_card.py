"""
Per-prompt answer state: expanded flag, free text and selected suggestions.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Set

from services.errors import UnknownSuggestionError
from services.prompts import Prompt

logger = logging.getLogger("PromptCard")

ResponseCallback = Callable[[str, str, str], None]


class PromptCard:
    """
    Collects one answer and reports it upward after every edit.

    Free text wins over selected suggestions; an empty combination is never
    reported.
    """

    def __init__(self, prompt: Prompt, index: int, on_response: ResponseCallback):
        self.prompt = prompt
        self.index = index
        self.on_response = on_response
        self.expanded = False
        self.answer = ""
        self.selected: Set[str] = set()

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def final_answer(self) -> str:
        text = self.answer.strip()
        if text:
            return text
        # suggestion order keeps the joined answer stable across toggles
        return ", ".join(s for s in self.prompt.suggestions if s in self.selected)

    @property
    def captured(self) -> bool:
        return bool(self.answer.strip() or self.selected)

    def toggle(self) -> bool:
        self.expanded = not self.expanded
        return self.expanded

    def set_answer(self, text: str) -> None:
        self.answer = text
        self.report()

    def toggle_suggestion(self, suggestion: str) -> bool:
        """Flip membership of a suggestion; returns True when now selected"""
        if suggestion not in self.prompt.suggestions:
            raise UnknownSuggestionError(self.prompt.id, suggestion)
        if suggestion in self.selected:
            self.selected.discard(suggestion)
        else:
            self.selected.add(suggestion)
        self.report()
        return suggestion in self.selected

    def report(self) -> None:
        final_answer = self.final_answer
        if not final_answer:
            return
        logger.debug("Reporting answer for %s (%d chars)",
                     self.prompt.id, len(final_answer))
        self.on_response(self.prompt.id, self.prompt.question, final_answer)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.prompt.to_dict(),
            "number": self.number,
            "expanded": self.expanded,
            "answer": self.answer,
            "selected": [s for s in self.prompt.suggestions if s in self.selected],
            "captured": self.captured,
        }
