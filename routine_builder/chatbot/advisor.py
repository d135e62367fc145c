"""
Routine advisor - turns the selection into a constrained prompt and relays chat turns.
"""

from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional, Sequence

from routine_builder.catalog.models import Product
from routine_builder.chatbot import prompts
from routine_builder.chatbot.relay import RelayClient, RelayResult, RelayStatus
from routine_builder.chatbot.transcript import Transcript

logger = logging.getLogger(__name__)


def selection_prompt(products: Sequence[Product]) -> str:
    return json.dumps([p.to_dict() for p in products], ensure_ascii=False, separators=(",", ":"))


class RoutineAdvisor:
    """Keeps the relay message history and writes chat turns to the transcript.

    Relay failures never raise: they end up as fixed bot messages in the
    transcript. The user's own turn always stays in the transcript.
    """

    def __init__(self, relay: RelayClient, transcript: Transcript) -> None:
        self.relay = relay
        self.transcript = transcript
        self.messages: List[Dict[str, str]] = []

    async def generate_routine(self, selection: Sequence[Product]) -> Optional[RelayResult]:
        if not selection:
            self.transcript.append_bot(prompts.EMPTY_SELECTION_GUIDANCE)
            return None

        self.transcript.append_user(prompts.GENERATE_REQUEST)
        request_id = self.relay.next_request_id()
        self.transcript.append_bot(prompts.ROUTINE_PENDING, pending=True, request_id=request_id)

        # a routine request starts a fresh conversation
        self.messages = [
            {"role": "system", "content": prompts.SYSTEM_PROMPT},
            {"role": "user", "content": selection_prompt(selection)},
        ]

        result = await self.relay.complete(list(self.messages), request_id=request_id)
        self._record(result, fallback=prompts.ROUTINE_FALLBACK, transport_error=prompts.ROUTINE_TRANSPORT_ERROR)
        return result

    async def send_chat(self, text: str) -> Optional[RelayResult]:
        text = (text or "").strip()
        if not text:
            return None

        self.transcript.append_user(text)
        self.messages.append({"role": "user", "content": text})
        request_id = self.relay.next_request_id()
        self.transcript.append_bot(prompts.CHAT_PENDING, pending=True, request_id=request_id)

        result = await self.relay.complete(list(self.messages), request_id=request_id)
        self._record(result, fallback=prompts.CHAT_FALLBACK, transport_error=prompts.CHAT_TRANSPORT_ERROR)
        return result

    def _record(self, result: RelayResult, fallback: str, transport_error: str) -> None:
        if result.status == RelayStatus.TRANSPORT_ERROR:
            self.transcript.resolve(result.request_id, transport_error)
            return

        reply = result.reply if result.status == RelayStatus.OK else fallback
        self.transcript.resolve(result.request_id, reply)
        self.messages.append({"role": "assistant", "content": reply})
