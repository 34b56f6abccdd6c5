import os
import platform
from flask import Blueprint, jsonify, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from nyaya_lite.api import config, state
from nyaya_lite.data.loader import list_categories

monitoring_bp = Blueprint('monitoring', __name__)


@monitoring_bp.route("/metrics", methods=["GET"])
def metrics():
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


@monitoring_bp.route("/version", methods=["GET"])
@monitoring_bp.route("/api/version", methods=["GET"])
def version():
    return jsonify({
        "version": config.APP_VERSION,
        "env": config.APP_ENV,
        "commit": os.getenv("GIT_COMMIT"),
        "python": platform.python_version(),
        "law_db": os.path.basename(config.LAW_DB_PATH),
        "corpus_size": len(state.corpus),
        "lawyers": len(state.lawyers),
        "ai_backend": state.ai_backend is not None,
    })


@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    if not state.corpus_loaded:
        return jsonify({"status": "error", "detail": "law database not loaded"}), 500
    return jsonify({
        "status": "ok",
        "laws": len(state.corpus),
        "categories": len(list_categories(state.corpus)),
    }), 200


@monitoring_bp.route("/api/health/ready", methods=["GET"])
def health_ready():
    """Readiness: the law database loaded and has at least one record."""
    checks = {
        'corpus_loaded': state.corpus_loaded,
        'corpus_non_empty': bool(state.corpus),
    }
    ready = all(checks.values())
    return jsonify({"ready": ready, "checks": checks}), 200 if ready else 503


@monitoring_bp.route("/api/health/live", methods=["GET"])
def health_live():
    return jsonify({"alive": True}), 200


@monitoring_bp.route("/api/stats/analyses", methods=["GET"])
def analysis_stats():
    """Answer counts by source and urgency, plus live session count.

    Idle sessions are swept first so the count reflects open conversations.
    """
    state.sessions.cleanup()
    stats = dict(state.analysis_stats)
    stats['by_urgency'] = dict(stats.get('by_urgency') or {})
    stats['active_sessions'] = len(state.sessions)
    return jsonify(stats)
