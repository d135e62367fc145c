"""Chat transcript shown to the user."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

USER = "user"
BOT = "bot"


@dataclass
class TranscriptEntry:
    role: str
    text: str
    request_id: Optional[int] = None
    pending: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Transcript:
    def __init__(self) -> None:
        self._entries: List[TranscriptEntry] = []

    @property
    def entries(self) -> List[TranscriptEntry]:
        return list(self._entries)

    def append_user(self, text: str) -> TranscriptEntry:
        entry = TranscriptEntry(role=USER, text=text)
        self._entries.append(entry)
        return entry

    def append_bot(self, text: str, *, pending: bool = False, request_id: Optional[int] = None) -> TranscriptEntry:
        entry = TranscriptEntry(role=BOT, text=text, request_id=request_id, pending=pending)
        self._entries.append(entry)
        return entry

    def resolve(self, request_id: int, text: str) -> TranscriptEntry:
        """Replace the pending placeholder for ``request_id`` with ``text``.

        Appends a new bot entry if no such placeholder exists.
        """
        for entry in self._entries:
            if entry.pending and entry.request_id == request_id:
                entry.text = text
                entry.pending = False
                return entry
        return self.append_bot(text, request_id=request_id)

    def to_list(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
