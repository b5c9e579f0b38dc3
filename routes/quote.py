from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from services import quote as quote_service
from services.quote import RESPONSE_HEADERS

QUOTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

quote_bp = Blueprint("quote", __name__)


@quote_bp.before_app_request
def preflight():
    """Answer CORS preflight on any path with an empty 200."""
    if request.method == "OPTIONS":
        return Response("", status=200, content_type="application/json")


@quote_bp.after_app_request
def add_cors_headers(response):
    for name, value in RESPONSE_HEADERS.items():
        response.headers[name] = value
    return response


@quote_bp.app_errorhandler(HTTPException)
def json_http_error(exc):
    """Render Flask's own 404/405/... pages as JSON."""
    message = "Method not allowed" if exc.code == 405 else exc.name
    response = jsonify({"error": message})
    response.status_code = exc.code or 500
    return response


@quote_bp.route("/api/freight-quote", methods=QUOTE_METHODS)
@quote_bp.route("/.netlify/functions/freight-quote", methods=QUOTE_METHODS)
def freight_quote():
    status, payload = quote_service.dispatch(
        request.method, request.get_data(), current_app.config
    )
    if payload is None:
        return Response("", status=status, content_type="application/json")
    return jsonify(payload), status
