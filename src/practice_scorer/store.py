"""File-backed response store.

Keeps one JSON file per assessment session so answers survive between
CLI runs. The engine never touches the store; callers load responses
and pass them to ``AssessmentEngine.evaluate``.
"""

import json
import logging
import re
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from .errors import StorageError
from .schema import Response

logger = logging.getLogger(__name__)

SESSION_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]{0,127}")


class JsonFileResponseStore:
    """Stores responses as ``<directory>/<session_id>.json``."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def load(self, session_id: str) -> dict[str, Response]:
        """Load a session's responses; an unknown session is empty.

        Raises:
            StorageError: If the file cannot be read or parsed.
        """
        path = self._path(session_id)
        if not path.exists():
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            responses = [Response.model_validate(item) for item in data.get("responses", [])]
        except (OSError, json.JSONDecodeError, AttributeError, ValidationError) as e:
            raise StorageError(f"Could not read session '{session_id}': {e}") from e

        return {r.question_id: r for r in responses}

    def save(self, session_id: str, responses: dict[str, Response]) -> Path:
        """Replace a session's responses.

        Raises:
            StorageError: If the file cannot be written.
        """
        path = self._path(session_id)
        data = {
            "session_id": session_id,
            "responses": [r.model_dump() for r in responses.values()],
        }

        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            tmp_path.replace(path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Could not write session '{session_id}': {e}") from e

        logger.debug("Saved %d responses for session %s", len(responses), session_id)
        return path

    def record(self, session_id: str, response: Response) -> dict[str, Response]:
        """Add or replace one answer and persist the session."""
        responses = self.load(session_id)
        responses[response.question_id] = response
        self.save(session_id, responses)
        return responses

    def clear(self, session_id: str) -> None:
        """Delete a session. Clearing an unknown session is a no-op."""
        path = self._path(session_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not clear session '{session_id}': {e}") from e

    def list_sessions(self) -> list[str]:
        """Stored session ids, sorted."""
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))

    def _path(self, session_id: str) -> Path:
        if not isinstance(session_id, str) or not SESSION_ID_PATTERN.fullmatch(session_id):
            raise StorageError(f"Invalid session id: {session_id!r}")
        return self.directory / f"{session_id}.json"
