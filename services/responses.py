"""
Collected workshop responses, one per prompt id.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterator, List, Optional


@dataclass
class Response:
    id: str
    question: str
    answer: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class ResponseStore:
    """
    Upsert-by-id response collection.

    Dict insertion order is kept when an existing key is reassigned, so a
    replaced response stays where it was first added and new ids append.
    """

    def __init__(self):
        self._responses: Dict[str, Response] = {}

    def upsert(self, prompt_id: str, question: str, answer: str) -> Response:
        response = Response(id=prompt_id, question=question, answer=answer)
        self._responses[prompt_id] = response
        return response

    def get(self, prompt_id: str) -> Optional[Response]:
        return self._responses.get(prompt_id)

    def clear(self) -> None:
        self._responses.clear()

    def to_list(self) -> List[Response]:
        return list(self._responses.values())

    def answers(self) -> List[str]:
        return [response.answer for response in self._responses.values()]

    def __len__(self) -> int:
        return len(self._responses)

    def __iter__(self) -> Iterator[Response]:
        return iter(self.to_list())

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._responses
