from typing import Any, Callable, Dict, List, Optional
import time

from nyaya_lite.api import config
from nyaya_lite.models import LawRecord, Lawyer
from nyaya_lite.session import ConversationStore

# Law corpus (loaded at startup by dependencies.load_corpus)
corpus: List[LawRecord] = []
corpus_loaded: bool = False

# Lawyer directory (optional; an empty list just means no referrals)
lawyers: List[Lawyer] = []

# Conversation sessions, owned by the request layer
sessions = ConversationStore(
    timeout_seconds=config.SESSION_TIMEOUT_SECONDS,
    max_messages=config.SESSION_MAX_MESSAGES,
    history_limit=config.SESSION_HISTORY_LIMIT,
)

# Optional generative-AI backend: fn(text, laws, conversation_context) -> dict | None.
# None means every request is answered by the local fallback analyzer.
ai_backend: Optional[Callable[[str, List[LawRecord], Dict[str, Any]], Optional[Dict[str, Any]]]] = None

# Analysis stats (for monitoring)
analysis_stats: Dict[str, Any] = {
    'total_analyses': 0,
    'ai_answers': 0,
    'local_answers': 0,
    'no_match': 0,
    'ai_failures': 0,
    'by_urgency': {},
    'last_analysis_time': None,
}

# Metrics
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
ANALYSES_TOTAL: Any = None


def update_analysis_stats(source: str, urgency: Optional[str], matched: bool, ai_failed: bool = False):
    """Update analysis statistics for monitoring."""
    analysis_stats['total_analyses'] = int(analysis_stats.get('total_analyses') or 0) + 1
    analysis_stats['last_analysis_time'] = time.time()
    if source == 'AI':
        analysis_stats['ai_answers'] += 1
    elif matched:
        analysis_stats['local_answers'] += 1
    else:
        analysis_stats['no_match'] += 1
    if ai_failed:
        analysis_stats['ai_failures'] += 1
    if urgency:
        by_urgency = analysis_stats.setdefault('by_urgency', {})
        by_urgency[urgency] = int(by_urgency.get(urgency) or 0) + 1
