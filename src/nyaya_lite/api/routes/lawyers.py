from flask import Blueprint, request, jsonify
from flasgger import swag_from
from pydantic import ValidationError

from nyaya_lite.api import state, dependencies, models
from nyaya_lite.data.loader import filter_lawyers

lawyers_bp = Blueprint('lawyers', __name__)


@lawyers_bp.route("/api/lawyers", methods=["GET"])
@swag_from({
    'tags': ['lawyers'],
    'parameters': [
        {'name': 'specialization', 'in': 'query', 'type': 'string', 'required': False,
         'description': 'Case-insensitive substring, e.g. "family" or "Criminal Law"'},
    ],
    'responses': {200: {'description': 'Lawyers in directory order'}}
})
def get_lawyers():
    auth = dependencies.require_api_key()
    if auth:
        return auth
    try:
        params = models.LawyerSearchParams(**request.args.to_dict())
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors(include_url=False, include_context=False)}), 400
    lawyers = filter_lawyers(state.lawyers, params.specialization)
    return jsonify([x.model_dump(mode="json", by_alias=True, exclude_none=True) for x in lawyers])
