import logging
from flask import Blueprint, request, jsonify
from flasgger import swag_from
from werkzeug.exceptions import BadRequest
from pydantic import ValidationError

from nyaya_lite.analyzer import analyze
from nyaya_lite.api import state, dependencies, models, constants, config
from nyaya_lite.api.extensions import limiter
from nyaya_lite.models import AnalysisResult
from nyaya_lite.session import detect_emotional_state

logger = logging.getLogger(__name__)
analysis_bp = Blueprint('analysis', __name__)


def _count_analysis(source: str, urgency: str) -> None:
    try:
        state.ANALYSES_TOTAL.labels(source, urgency).inc()
    except Exception:
        pass


def _relevance(result: AnalysisResult):
    return [
        {
            "id": m.record.id,
            "title": m.record.title,
            "score": m.score,
            "relevance_reason": m.relevance_reason.value,
        }
        for m in result.scored
    ]


@analysis_bp.route("/api/analyze", methods=["POST"])
@limiter.limit("30/minute")
@swag_from({
    'tags': ['analyze'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {
            'type': 'object',
            'properties': {
                'text': {'type': 'string', 'example': 'My phone was stolen on the street'},
                'sessionId': {'type': 'string'},
            }
        }
    }],
    'responses': {200: {'description': 'OK'}}
})
def analyze_situation():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    raw = request.get_json(silent=True)
    if raw is None:
        return jsonify({"error": "Expected application/json body"}), 400
    if not isinstance(raw, dict):
        raise BadRequest("Body must be a JSON object")
    try:
        parsed = models.AnalyzeRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors(include_url=False, include_context=False)}), 400

    text = parsed.text
    session_id = parsed.session_id or config.DEFAULT_SESSION_ID
    sessions = state.sessions

    emotional_state = detect_emotional_state(text)
    sessions.update_context(session_id, emotionalState=emotional_state)
    sessions.add_message(session_id, 'user', text)
    is_follow_up = sessions.is_follow_up_question(session_id, text)
    conversation_context = sessions.get_full_context(session_id)

    is_legal_query = bool(constants.LEGAL_QUERY_RE.search(text))
    ai_analysis = None
    ai_attempted = state.ai_backend is not None and (is_legal_query or is_follow_up)
    if ai_attempted:
        logger.info(f"Analyzing legal query (session={session_id}, follow_up={is_follow_up})")
        ai_analysis = dependencies.ask_ai_backend(text, state.corpus, conversation_context)
        logger.info(f"AI analysis result: {'success' if ai_analysis else 'failed/null'}")

    try:
        local = analyze(text, state.corpus)
    except Exception as e:
        logger.exception("Local analysis failed")
        return jsonify({"error": "analysis_failed", "details": str(e)}), 500

    urgency = local.analysis.urgency_level.value if local.analysis else None
    if local.analysis:
        sessions.update_context(
            session_id,
            legalCategory=local.analysis.primary_issue,
            severity=urgency,
            detectedEntities=local.analysis.entities_detected.model_dump(),
        )
    matches = [m.model_dump(mode="json") for m in local.matches]

    if ai_analysis:
        sessions.add_message(session_id, 'assistant',
                             ai_analysis.get('summary') or ai_analysis.get('detailed_analysis') or '')
        state.update_analysis_stats(constants.SOURCE_AI, urgency, bool(matches))
        _count_analysis(constants.SOURCE_AI, urgency or 'Normal')
        return jsonify({
            **ai_analysis,
            "matches": matches,
            "source": constants.SOURCE_AI,
            "sessionId": session_id,
            "isFollowUp": is_follow_up,
            "emotionalState": emotional_state,
        })

    state.update_analysis_stats(constants.SOURCE_LOCAL, urgency, bool(matches), ai_failed=ai_attempted)
    _count_analysis(constants.SOURCE_LOCAL, urgency or 'Normal')

    if not matches:
        sessions.add_message(session_id, 'assistant', constants.NO_MATCH_MESSAGE)
        return jsonify({
            "message": constants.NO_MATCH_MESSAGE,
            "suggestion": constants.NO_MATCH_SUGGESTION,
            "matches": [],
            "analysis": {},
            "sessionId": session_id,
        })

    sessions.add_message(session_id, 'assistant', f"Found {len(matches)} relevant law(s) for your situation.")
    analysis = local.analysis.model_dump(mode="json") if local.analysis else {}
    return jsonify({
        "matches": matches,
        **analysis,
        "relevance": _relevance(local),
        "source": constants.SOURCE_LOCAL,
        "sessionId": session_id,
        "isFollowUp": is_follow_up,
        "emotionalState": emotional_state,
    })


@analysis_bp.route("/api/sessions/<session_id>", methods=["DELETE"])
def delete_session(session_id: str):
    auth = dependencies.require_api_key()
    if auth:
        return auth
    if state.sessions.delete_session(session_id):
        return jsonify({"deleted": session_id})
    return jsonify({"error": "not_found"}), 404
