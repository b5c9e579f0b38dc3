"""Serverless entry point for the freight quote endpoint.

``handler(event, context)`` accepts a Netlify/AWS Lambda style proxy
event and returns ``{"statusCode", "headers", "body"}``.  It shares the
request pipeline with the Flask app through ``services.quote.dispatch``.
"""

from __future__ import annotations

import base64
import json
import logging

from config import Config, config_as_dict
from quote.errors import ClientInputError
from services import quote as quote_service
from services.quote import INVALID_BODY, RESPONSE_HEADERS

# Only this project's loggers follow LOG_LEVEL; the root logger is left to the platform.
for _name in ("quote", "services"):
    logging.getLogger(_name).setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))


def _event_method(event: dict) -> str:
    method = event.get("httpMethod")
    if not method:
        method = event.get("requestContext", {}).get("http", {}).get("method", "")
    return method or ""


def _event_body(event: dict):
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True)
        except ValueError:
            raise ClientInputError(error=INVALID_BODY)
    return body


def _response(status: int, payload: dict | None) -> dict:
    return {
        "statusCode": status,
        "headers": dict(RESPONSE_HEADERS),
        "body": "" if payload is None else json.dumps(payload),
    }


def handler(event: dict, context=None, config: dict | None = None) -> dict:
    """Handle one proxied HTTP request."""
    if config is None:
        config = config_as_dict(Config)
    event = event or {}
    try:
        body = _event_body(event)
    except ClientInputError as e:
        return _response(e.status_code, e.to_dict())
    return _response(*quote_service.dispatch(_event_method(event), body, config))
