"""
Conversational relay HTTP client.

Posts ``{model, messages}`` to the relay worker and reads the reply at
``choices[0].message.content``. Every call gets a monotonically increasing
request id so callers can match a response to the turn that caused it.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import httpx
from pydantic import BaseModel, Field, ValidationError

from routine_builder.errors import RelayResponseError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"


class RelayStatus(str, Enum):
    OK = "OK"
    NO_CONTENT = "NO_CONTENT"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"


@dataclass
class RelayResult:
    request_id: int
    status: RelayStatus
    reply: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == RelayStatus.OK


class CompletionMessageModel(BaseModel):
    content: Optional[str] = None


class CompletionChoiceModel(BaseModel):
    message: Optional[CompletionMessageModel] = None


class CompletionResponseModel(BaseModel):
    choices: List[CompletionChoiceModel] = Field(default_factory=list)


def parse_completion(raw: Any) -> str:
    """Extract the reply text from a relay response body.

    Raises:
        RelayResponseError: no non-empty ``choices[0].message.content``
    """
    if not isinstance(raw, dict):
        raise RelayResponseError("Relay response must be a JSON object", payload=raw)
    try:
        body = CompletionResponseModel(**raw)
    except ValidationError as exc:
        raise RelayResponseError(f"Relay response validation failed: {exc}", payload=raw) from exc

    if not body.choices or body.choices[0].message is None:
        raise RelayResponseError("Relay response has no choices[0].message", payload=raw)
    content = body.choices[0].message.content
    if not content:
        raise RelayResponseError("Relay response message has no content", payload=raw)
    return content


class RelayClient:
    def __init__(
        self,
        worker_url: str,
        model: str = DEFAULT_MODEL,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.worker_url = worker_url
        self.model = model
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._ids = itertools.count(1)
        self.requests_sent = 0

    def next_request_id(self) -> int:
        return next(self._ids)

    async def complete(self, messages: Sequence[Dict[str, str]], request_id: Optional[int] = None) -> RelayResult:
        """Send one chat completion request. Never raises."""
        if request_id is None:
            request_id = self.next_request_id()

        payload = {
            "model": self.model,
            "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        }

        self.requests_sent += 1
        logger.info("Relay request %s with %d messages", request_id, len(payload["messages"]))
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.post(
                    self.worker_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Relay request %s failed: %s: %s", request_id, type(e).__name__, e, exc_info=True)
            return RelayResult(request_id=request_id, status=RelayStatus.TRANSPORT_ERROR, error=str(e))

        if response.is_error:
            logger.warning("Relay request %s returned HTTP %s", request_id, response.status_code)

        try:
            reply = parse_completion(data)
        except RelayResponseError as e:
            logger.warning("Relay request %s returned no reply: %s", request_id, e)
            return RelayResult(request_id=request_id, status=RelayStatus.NO_CONTENT, error=str(e))

        return RelayResult(request_id=request_id, status=RelayStatus.OK, reply=reply)
