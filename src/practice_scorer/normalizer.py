"""Response Normalizer - Phase 1 of the Assessment Engine.

Turns whatever the caller holds (a plain answer mapping, stored response
payloads, or Response objects) into validated responses keyed by
question id. Bad items are dropped with a warning, never raised.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from pydantic import ValidationError

from .errors import ResponseValidationError
from .schema import Response

logger = logging.getLogger(__name__)


class ResponseNormalizer:
    """Normalizes raw responses into ``{question_id: Response}``.

    Accepted shapes:
    - ``{"dependabot": 3}``
    - ``{"dependabot": {"value": 3, "timestamp": 1700000000000}}``
    - ``[Response(...), {"question_id": "dependabot", "value": 3}]``

    Later answers to the same question replace earlier ones.
    """

    def __init__(self, known_question_ids: Optional[Iterable[str]] = None):
        self.known_question_ids = set(known_question_ids) if known_question_ids is not None else None

    def normalize(self, raw: Any) -> tuple[dict[str, Response], list[str]]:
        """Validate raw responses.

        Returns:
            Tuple of (responses by question id, processing warnings).
        """
        responses: dict[str, Response] = {}
        warnings: list[str] = []

        if raw is None:
            return responses, warnings

        for question_id, payload in self._iter_items(raw, warnings):
            try:
                response = self._parse_item(question_id, payload)
            except ResponseValidationError as e:
                logger.warning("Dropping response: %s", e)
                warnings.append(str(e))
                continue
            responses[response.question_id] = response

        return responses, warnings

    def _iter_items(self, raw: Any, warnings: list[str]):
        if isinstance(raw, Mapping):
            yield from raw.items()
        elif isinstance(raw, (list, tuple)):
            for item in raw:
                if isinstance(item, Response):
                    yield item.question_id, item
                elif isinstance(item, Mapping):
                    yield item.get("question_id"), item
                else:
                    message = f"Unsupported response entry of type {type(item).__name__}"
                    logger.warning("Dropping response: %s", message)
                    warnings.append(message)
        else:
            message = f"Unsupported responses payload of type {type(raw).__name__}"
            logger.warning(message)
            warnings.append(message)

    def _parse_item(self, question_id: Any, payload: Any) -> Response:
        """Build a Response for one item.

        Raises:
            ResponseValidationError: If the item cannot be used.
        """
        if not isinstance(question_id, str) or not question_id:
            raise ResponseValidationError(f"Response without a question id: {payload!r}")

        if self.known_question_ids is not None and question_id not in self.known_question_ids:
            raise ResponseValidationError(
                f"Unknown question id '{question_id}'", question_id=question_id
            )

        if isinstance(payload, Response):
            return payload

        if isinstance(payload, Mapping):
            data = {
                "question_id": question_id,
                "value": payload.get("value"),
                "timestamp": payload.get("timestamp", 0),
            }
        else:
            data = {"question_id": question_id, "value": payload}

        try:
            return Response.model_validate(data)
        except ValidationError as e:
            reason = "; ".join(err["msg"] for err in e.errors())
            raise ResponseValidationError(
                f"Invalid value for '{question_id}': {reason}", question_id=question_id
            ) from e
