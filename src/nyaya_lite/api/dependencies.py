import logging
from typing import Any, Dict, List, Optional
from flask import request, jsonify

from nyaya_lite.api import config, state
from nyaya_lite.data.loader import load_corpus as _load_corpus_file, load_lawyers as _load_lawyers_file
from nyaya_lite.errors import CorpusLoadError
from nyaya_lite.models import LawRecord

logger = logging.getLogger("api")


def load_corpus(path: Optional[str] = None) -> None:
    path = path or config.LAW_DB_PATH
    try:
        state.corpus = _load_corpus_file(path)
        state.corpus_loaded = True
        logger.info(f"[api] Loaded {len(state.corpus)} laws from {path}")
    except CorpusLoadError as e:
        # Don't raise here to allow app to start; readiness reports the failure
        state.corpus = []
        state.corpus_loaded = False
        logger.error(f"[api] Failed to load law database: {e}")


def load_lawyers(path: Optional[str] = None) -> None:
    path = path or config.LAWYERS_DB_PATH
    try:
        state.lawyers = _load_lawyers_file(path)
        logger.info(f"[api] Loaded {len(state.lawyers)} lawyers from {path}")
    except CorpusLoadError as e:
        state.lawyers = []
        logger.warning(f"[api] Lawyer directory unavailable: {e}")


def require_api_key():
    if config.API_KEY:
        key = request.headers.get("X-API-Key", "")
        if key != config.API_KEY:
            return jsonify({"error": "Unauthorized"}), 401
    return None


def ask_ai_backend(text: str, laws: List[LawRecord], conversation_context: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Call the configured AI backend; any failure means "use the fallback"."""
    backend = state.ai_backend
    if backend is None:
        return None
    try:
        result = backend(text, laws[:config.AI_CONTEXT_LAWS], conversation_context)
    except Exception as e:
        logger.warning(f"[api] AI backend failed, falling back to local analysis: {e}")
        return None
    if result is not None and not isinstance(result, dict):
        logger.warning(f"[api] AI backend returned {type(result).__name__}, expected dict")
        return None
    return result
