"""Blueprint exposing the execute/prove pipeline over HTTP."""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ..examples import example_programs
from ..pipeline import execute_program, generate_proof
from ..results import to_wire
from .errors import APIError
from .models import ExecutionRequest

api_bp = Blueprint("playground_api", __name__)


def _json_request() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise APIError.json_body_required()
    return data


def _engine():
    return current_app.extensions["engine"]


@api_bp.get("/examples")
def api_examples():
    return jsonify(example_programs()), 200


@api_bp.post("/execute")
def api_execute():
    req = ExecutionRequest.model_validate(_json_request())
    result = execute_program(req.program, req.inputs_json(), engine=_engine())
    return jsonify(to_wire(result)), 200


@api_bp.post("/prove")
def api_prove():
    req = ExecutionRequest.model_validate(_json_request())
    result = generate_proof(req.program, req.inputs_json(), engine=_engine())
    return jsonify(to_wire(result)), 200
