from __future__ import annotations

import io
import json
import logging
import os
from typing import Any

from flask import Flask, Response, current_app, jsonify, request, send_file

from errors import AddFailure, EditorError, LoadFailure, SaveFailure, ValidationFailure
from persistence import ConfigGateway
from schema import DISPLAY_PARAMS, LOCKED_FIELD_TYPES
from session import EditorSession
from settings import CONFIG_CSV_PATH, DOWNLOAD_NAME, FIELD_TYPES
from template import HTML_TEMPLATE

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.setdefault("CONFIG_CSV_PATH", CONFIG_CSV_PATH)
app.config.setdefault("DOWNLOAD_NAME", DOWNLOAD_NAME)


# ---------------------------------------------------------------------------
# Shared utilities
# ---------------------------------------------------------------------------


def _gateway() -> ConfigGateway:
    return ConfigGateway(current_app.config["CONFIG_CSV_PATH"])


def _session_from_body(body: dict[str, Any]) -> EditorSession:
    return EditorSession.from_text(
        _content_from(body),
        _gateway(),
        download_name=current_app.config["DOWNLOAD_NAME"],
    )


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def _content_from(body: dict[str, Any]) -> str:
    content = body.get("content")
    if not isinstance(content, str):
        raise ValueError("content must be a string")
    return content


def _client_config() -> str:
    payload = {
        "displayParams": list(DISPLAY_PARAMS),
        "lockedTypes": sorted(LOCKED_FIELD_TYPES),
        "fieldTypes": [{"value": t.value, "label": t.label} for t in FIELD_TYPES],
    }
    # Keep "</script>" inside values from closing the JSON block early.
    return json.dumps(payload).replace("</", "<\\/")


def _error_response(exc: EditorError, status: int) -> tuple[Response, int]:
    return jsonify(exc.to_dict()), status


# ---------------------------------------------------------------------------
# Flask routes
# ---------------------------------------------------------------------------


@app.route("/")
def index():
    html = HTML_TEMPLATE.replace("{CFG_JSON}", _client_config())
    return Response(html, mimetype="text/html")


@app.route("/api/config/read", methods=["GET"])
def read_config():
    gateway = _gateway()
    try:
        raw = gateway.load()
    except LoadFailure as exc:
        return _error_response(exc, 500)
    payload = EditorSession.from_text(raw, gateway).to_payload()
    payload["content"] = raw
    return jsonify(payload)


@app.route("/api/config/save", methods=["POST"])
def save_config():
    try:
        content = _content_from(_json_body())
    except ValueError as exc:
        logger.warning("Rejected save request: %s", exc)
        return _error_response(SaveFailure(reason="bad_request", cause=exc), 400)
    try:
        _gateway().save(content)
    except SaveFailure as exc:
        return _error_response(exc, 500)
    return jsonify({"success": True})


@app.route("/api/fields/set", methods=["POST"])
def set_field():
    body = _json_body()
    try:
        session = _session_from_body(body)
    except ValueError as exc:
        return _error_response(
            ValidationFailure(str(exc), reason="bad_request", column="", value=""), 400
        )

    field_code = body.get("field_code")
    column = body.get("column")
    value = body.get("value", "")
    if not isinstance(field_code, str) or not isinstance(column, str):
        exc = ValidationFailure(
            "field_code and column must be strings",
            reason="bad_request",
            column=column if isinstance(column, str) else "",
            value=str(value),
        )
        return _error_response(exc, 400)
    value = "" if value is None else str(value)

    try:
        session.set_field(field_code, column, value)
    except EditorError as exc:
        return _error_response(exc, 422)
    return jsonify(session.to_payload())


@app.route("/api/fields/add", methods=["POST"])
def add_field():
    try:
        session = _session_from_body(_json_body())
    except ValueError as exc:
        return _error_response(AddFailure(str(exc), reason="bad_request"), 400)
    try:
        field_code = session.add_record()
    except EditorError as exc:
        return _error_response(exc, 422)
    payload = session.to_payload()
    payload["field_code"] = field_code
    return jsonify(payload)


@app.route("/api/config/download", methods=["POST"])
def download_config():
    body = _json_body() if request.is_json else {"content": request.form.get("content")}
    try:
        session = _session_from_body(body)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    filename, mimetype, data = session.download()
    return send_file(
        io.BytesIO(data),
        mimetype=mimetype,
        as_attachment=True,
        download_name=filename,
    )


@app.route("/favicon.ico")
def favicon():
    return "", 204


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "5000"))
    debug = os.environ.get("DEBUG", "0") in ["1", "true", "True"]
    app.run(host=host, port=port, debug=debug)
