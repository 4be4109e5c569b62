"""
Workshop session: the page-level state behind one visitor's workshop.

Owns the static prompts, one PromptCard per prompt, the collected
responses and the current view (answering or summary).
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from services.errors import NoResponsesError, UnknownPromptError
from services.export import DEFAULT_THEME_LIMIT, render_export
from services.insights import InsightsSummary, summarize
from services.prompt_card import PromptCard
from services.prompts import SPECULATIVE_PROMPTS, Prompt
from services.responses import Response, ResponseStore
from services.word_cloud import DEFAULT_WORD_LIMIT

ANSWERING = "answering"
SUMMARY = "summary"


class WorkshopSession:
    def __init__(self, prompts: Tuple[Prompt, ...] = SPECULATIVE_PROMPTS,
                 word_limit: int = DEFAULT_WORD_LIMIT,
                 theme_limit: int = DEFAULT_THEME_LIMIT,
                 sid: str = "default"):
        self.logger = logging.getLogger("WorkshopSession")
        self.sid = sid
        self.prompts = prompts
        self.word_limit = word_limit
        self.theme_limit = theme_limit
        self.store = ResponseStore()
        self.view = ANSWERING
        self.cards: List[PromptCard] = []
        self._build_cards()

    def _build_cards(self) -> None:
        self.cards = [
            PromptCard(prompt, index, self.handle_response)
            for index, prompt in enumerate(self.prompts)
        ]

    def handle_response(self, prompt_id: str, question: str, answer: str) -> Response:
        return self.store.upsert(prompt_id, question, answer)

    def card(self, prompt_id: str) -> PromptCard:
        for card in self.cards:
            if card.prompt.id == prompt_id:
                return card
        raise UnknownPromptError(prompt_id)

    @property
    def responses(self) -> List[Response]:
        return self.store.to_list()

    @property
    def progress(self) -> Tuple[int, int]:
        return len(self.store), len(self.prompts)

    @property
    def can_summarize(self) -> bool:
        return len(self.store) > 0

    def show_summary(self) -> None:
        if not self.can_summarize:
            raise NoResponsesError()
        self.view = SUMMARY
        self.logger.info("Session %s: summary for %d responses",
                         self.sid, len(self.store))

    def back(self) -> None:
        """Return to the prompts; responses and card state start over"""
        self.view = ANSWERING
        self.store.clear()
        self._build_cards()
        self.logger.info("Session %s: back to prompts, responses cleared", self.sid)

    def insights(self) -> InsightsSummary:
        return summarize(self.responses, word_limit=self.word_limit)

    def export_text(self, today: Optional[date] = None) -> str:
        text = render_export(self.responses, self.insights(),
                             generated_on=today, theme_limit=self.theme_limit)
        self.logger.info("Session %s: exported %d responses",
                         self.sid, len(self.store))
        return text

    def to_dict(self) -> Dict[str, Any]:
        answered, total = self.progress
        return {
            "sid": self.sid,
            "view": self.view,
            "progress": {"answered": answered, "total": total},
            "can_summarize": self.can_summarize,
            "cards": [card.to_dict() for card in self.cards],
            "responses": [response.to_dict() for response in self.responses],
        }
