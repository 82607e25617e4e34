"""Exceptions raised by the assessment engine and its collaborators."""

from typing import Optional

from practice_catalog.errors import ConfigurationError


class ResponseValidationError(Exception):
    """A single response could not be used.

    Non-fatal: the normalizer drops the response, records the message
    as a processing warning and carries on.
    """

    def __init__(self, message: str, question_id: Optional[str] = None):
        super().__init__(message)
        self.question_id = question_id


class DegenerateInputWarning(UserWarning):
    """Input is valid but leaves nothing to score (e.g. no applicable questions)."""


class StorageError(Exception):
    """Raised by a response store when reading or writing fails."""


__all__ = [
    "ConfigurationError",
    "DegenerateInputWarning",
    "ResponseValidationError",
    "StorageError",
]
