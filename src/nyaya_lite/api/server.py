import time
import uuid
import json
import logging
from datetime import datetime, timezone
from flask import Flask, request, g, jsonify
from flask_cors import CORS
from flasgger import Swagger
from prometheus_client import Counter, Histogram
from werkzeug.exceptions import HTTPException
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

from nyaya_lite.api import config, state, dependencies
from nyaya_lite.api.routes import analysis_bp, laws_bp, lawyers_bp, monitoring_bp
from nyaya_lite.api.extensions import limiter
from nyaya_lite.errors import InvalidArgumentError

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO), format='%(message)s')
logger = logging.getLogger("api")


def _init_metrics():
    try:
        state.REQUEST_COUNT = Counter('nyaya_requests_total', 'HTTP requests by endpoint and status',
                                      ['method', 'endpoint', 'status'])
        state.REQUEST_LATENCY = Histogram('nyaya_request_latency_seconds', 'Request latency in seconds', ['endpoint'])
        state.ANALYSES_TOTAL = Counter('nyaya_analyses_total', 'Situation analyses by answer source and urgency',
                                       ['source', 'urgency'])
    except ValueError:
        # already registered (module reloaded in the same process)
        pass


def _init_sentry():
    if not config.SENTRY_DSN:
        return
    try:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
            profiles_sample_rate=config.SENTRY_PROFILES_SAMPLE_RATE,
            environment=config.APP_ENV,
            release=config.APP_VERSION,
        )
        logger.info("Sentry enabled for %s", config.APP_ENV)
    except Exception as e:
        logger.error(f"Sentry setup failed, continuing without it: {e}")


_init_metrics()
_init_sentry()

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH
CORS(app)
Swagger(app, template={"info": {"title": "Nyaya Lite API", "version": config.APP_VERSION}})
limiter.init_app(app)

app.register_blueprint(analysis_bp)
app.register_blueprint(laws_bp)
app.register_blueprint(lawyers_bp)
app.register_blueprint(monitoring_bp)


@app.errorhandler(InvalidArgumentError)
def _invalid_argument(e):
    return jsonify({"error": "invalid_argument", "details": str(e)}), 400


@app.errorhandler(HTTPException)
def _http_error(e):
    # JSON for the API surface; Swagger UI and friends keep Flask's HTML pages
    if not request.path.startswith("/api"):
        return e
    return jsonify({"error": e.name.lower().replace(" ", "_"), "details": e.description}), e.code


@app.before_request
def _tag_request():
    g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    g.started_at = time.perf_counter()


def _access_log(response, elapsed):
    body = request.get_json(silent=True) if request.is_json else None
    entry = {
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "request_id": g.get("request_id"),
        "method": request.method,
        "path": request.path,
        "status": response.status_code,
        "duration_ms": round(elapsed * 1000, 1),
        "session_id": body.get("sessionId") if isinstance(body, dict) else None,
        "remote_addr": request.headers.get("X-Forwarded-For", request.remote_addr),
    }
    logger.info(json.dumps(entry, ensure_ascii=False))


@app.after_request
def _finish_request(response):
    elapsed = time.perf_counter() - g.get("started_at", time.perf_counter())
    endpoint = request.url_rule.rule if request.url_rule else "unmatched"
    try:
        _access_log(response, elapsed)
        if state.REQUEST_COUNT:
            state.REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
        if state.REQUEST_LATENCY:
            state.REQUEST_LATENCY.labels(endpoint).observe(elapsed)
    except Exception:
        logger.debug("request bookkeeping failed", exc_info=True)
    response.headers["X-Request-ID"] = g.get("request_id", "")
    return response


dependencies.load_corpus()
dependencies.load_lawyers()

if __name__ == "__main__":
    app.run(debug=config.APP_ENV != "production", port=5000, host="0.0.0.0")
