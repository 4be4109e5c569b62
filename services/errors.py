"""
Errors raised by the workshop services.

Route handlers in main.py map each one onto an HTTP status code.
"""


class WorkshopError(Exception):
    """Base class for workshop state errors"""
    status_code = 400


class UnknownPromptError(WorkshopError):
    status_code = 404

    def __init__(self, prompt_id: str):
        super().__init__(f"Unknown prompt: {prompt_id}")
        self.prompt_id = prompt_id


class UnknownSuggestionError(WorkshopError):
    status_code = 422

    def __init__(self, prompt_id: str, suggestion: str):
        super().__init__(
            f"Suggestion not offered for prompt {prompt_id}: {suggestion}")
        self.prompt_id = prompt_id
        self.suggestion = suggestion


class NoResponsesError(WorkshopError):
    status_code = 409

    def __init__(self):
        super().__init__("Answer at least one prompt before generating insights")
