from flask import Blueprint, request, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from nyaya_lite.api import state, dependencies, models
from nyaya_lite.data.loader import find_law, list_categories, search_laws

laws_bp = Blueprint('laws', __name__)


@laws_bp.route("/api/categories", methods=["GET"])
def get_categories():
    return jsonify(list_categories(state.corpus))


@laws_bp.route("/api/laws", methods=["GET"])
@swag_from({
    'tags': ['laws'],
    'parameters': [
        {'name': 'search', 'in': 'query', 'type': 'string', 'required': False},
        {'name': 'category', 'in': 'query', 'type': 'string', 'required': False},
    ],
    'responses': {200: {'description': 'OK'}}
})
def get_laws():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    try:
        params = models.LawSearchParams(**request.args.to_dict())
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors(include_url=False, include_context=False)}), 400
    laws = search_laws(state.corpus, search=params.search, category=params.category)
    return jsonify([law.model_dump(mode="json") for law in laws])


@laws_bp.route("/api/laws/<law_id>", methods=["GET"])
def get_law(law_id: str):
    law = find_law(state.corpus, law_id)
    if law is None:
        return jsonify({"error": "Law not found"}), 404
    return jsonify(law.model_dump(mode="json"))
