"""Conversation sessions for multi-turn chats.

A ConversationStore is owned by the request-handling layer (see
``nyaya_lite.api.state``) rather than living as a module global. Idle sessions
are evicted lazily on every access and whenever ``cleanup()`` is called.
"""
from __future__ import annotations

import re
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

__all__ = ["Session", "ConversationStore", "detect_emotional_state", "EMOTION_PATTERNS", "FOLLOW_UP_PATTERNS"]

# First match wins.
EMOTION_PATTERNS: List[Tuple[str, re.Pattern]] = [
    ("distressed", re.compile(r"(urgent|emergency|help|scared|afraid|worried|panic)", re.IGNORECASE)),
    ("frustrated", re.compile(r"(angry|frustrated|furious|mad|unfair|cheated)", re.IGNORECASE)),
    ("confused", re.compile(r"(confused|don't understand|not sure|what should|help me understand)", re.IGNORECASE)),
    ("grateful", re.compile(r"(thank|thanks|appreciate|helpful|great)", re.IGNORECASE)),
]

FOLLOW_UP_PATTERNS: List[re.Pattern] = [
    re.compile(r"^(what|how|why|when|where|who|can|should|is|are|do|does)\b", re.IGNORECASE),
    re.compile(r"\b(also|additionally|furthermore|moreover|and|but)\b", re.IGNORECASE),
    re.compile(r"\b(more|another|other|else)\b", re.IGNORECASE),
    re.compile(r"^(yes|no|okay|ok|sure|maybe)\b", re.IGNORECASE),
]


def detect_emotional_state(text: str) -> str:
    for state, pattern in EMOTION_PATTERNS:
        if pattern.search(text or ""):
            return state
    return "neutral"


def _default_context() -> Dict[str, Any]:
    return {
        "detectedEntities": {},
        "userIntent": None,
        "legalCategory": None,
        "severity": None,
        "emotionalState": "neutral",
    }


@dataclass
class Session:
    id: str
    created_at: float
    last_activity: float
    messages: List[Dict[str, Any]] = field(default_factory=list)
    context: Dict[str, Any] = field(default_factory=_default_context)
    message_count: int = 0

    def metadata(self) -> Dict[str, Any]:
        return {
            "createdAt": self.created_at,
            "lastActivity": self.last_activity,
            "messageCount": self.message_count,
        }


class ConversationStore:
    """Session-keyed conversation history with idle-timeout eviction.

    Args:
        timeout_seconds: Idle time after which a session is dropped.
        max_messages: Messages kept per session; older ones are discarded.
        clock: Time source in seconds, injectable for tests.
    """

    def __init__(
        self,
        timeout_seconds: float = 30 * 60,
        max_messages: int = 20,
        history_limit: int = 10,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_messages = max_messages
        self.history_limit = history_limit
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def _evict_expired(self, now: float) -> int:
        expired = [sid for sid, s in self._sessions.items() if now - s.last_activity > self.timeout_seconds]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def cleanup(self) -> int:
        """Drop idle sessions; returns how many were removed."""
        with self._lock:
            return self._evict_expired(self._clock())

    def get_session(self, session_id: str) -> Session:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            session = self._sessions.get(session_id)
            if session is None:
                session = Session(id=session_id, created_at=now, last_activity=now)
                self._sessions[session_id] = session
            session.last_activity = now
            return session

    def add_message(self, session_id: str, role: str, content: str, **metadata: Any) -> Session:
        session = self.get_session(session_id)
        with self._lock:
            session.messages.append({"role": role, "content": content, "timestamp": self._clock(), **metadata})
            session.message_count += 1
            if len(session.messages) > self.max_messages:
                session.messages = session.messages[-self.max_messages:]
        return session

    def update_context(self, session_id: str, **updates: Any) -> Session:
        session = self.get_session(session_id)
        with self._lock:
            session.context = {**session.context, **updates}
        return session

    def get_conversation_history(self, session_id: str, limit: Optional[int] = None) -> List[Dict[str, str]]:
        session = self.get_session(session_id)
        limit = self.history_limit if limit is None else limit
        with self._lock:
            recent = session.messages[-limit:] if limit > 0 else []
        return [{"role": m["role"], "content": m["content"]} for m in recent]

    def get_full_context(self, session_id: str) -> Dict[str, Any]:
        history = self.get_conversation_history(session_id)
        session = self.get_session(session_id)
        with self._lock:
            return {
                "conversationHistory": history,
                "context": dict(session.context),
                "metadata": session.metadata(),
            }

    def delete_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def is_follow_up_question(self, session_id: str, text: str) -> bool:
        session = self.get_session(session_id)
        with self._lock:
            if len(session.messages) < 2:
                return False
        stripped = (text or "").strip()
        return any(p.search(stripped) for p in FOLLOW_UP_PATTERNS)
