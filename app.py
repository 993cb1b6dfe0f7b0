"""
app.py  –  Flask inspection API over pptoken

No tokenizing happens here; callers post tokens the preprocessing engine
already produced and get the Token views back.

Endpoints
─────────
GET  /api/kinds           Kind table: id, name, category
POST /api/token           Build one Token from { id, value }
POST /api/tokens          Wrap engine records, optionally re-tag kinds
"""

from flask import Flask, request, jsonify
from flask_cors import CORS
import os

from pptoken import (Token, TokenKind, TokenError, from_record, to_record,
                     kind_from_name, token_name)
from pptoken.kinds import KIND_NAMES, category_of
from pptoken.logs import configure_logging, get_logger

log = get_logger(__name__)


# ── App Setup ──────────────────────────────────────────────────────────────
def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)   # linters / editors call this from other origins

    # ── Routes ─────────────────────────────────────────────────────────────
    @app.route("/api/kinds", methods=["GET"])
    def get_kinds():
        """Return every named kind."""
        kinds = []
        for kind, name in KIND_NAMES.items():
            category = category_of(kind)
            kinds.append({
                "id":       kind,
                "name":     "T_" + name,
                "category": category.name if category is not None else None,
            })
        return jsonify({"kinds": kinds})

    @app.route("/api/token", methods=["POST"])
    def make_token():
        """
        Body:    { "id": <int>, "value": <any JSON value> }
        Returns: { "kind", "name", "display", "debug" }
        """
        data = request.get_json(silent=True) or {}
        args = {"id": data.get("id", TokenKind.UNKNOWN)}
        if "value" in data:
            args["value"] = data["value"]

        try:
            token = Token(**args)
        except TokenError as exc:
            return jsonify({"error": str(exc)}), 400

        return jsonify(_describe(token))

    @app.route("/api/tokens", methods=["POST"])
    def wrap_tokens():
        """
        Body:
            {
              "tokens": [ { kind|type, value, file, line, column }, … ],
              "retag":  { "T_FROM": "T_TO", … }      (optional)
            }

        Returns:
            {
              "tokens": [ { kind, type, value, file, line, column,
                            display, debug }, … ],
              "stats":  { total, retagged, by_kind: { NAME: count } }
            }
        """
        data = request.get_json(silent=True) or {}
        records = data.get("tokens")
        if not isinstance(records, list):
            return jsonify({"error": "No tokens provided"}), 400

        try:
            retag = {
                kind_from_name(src): kind_from_name(dst)
                for src, dst in (data.get("retag") or {}).items()
            }
            tokens = [from_record(rec) for rec in records]
        except (TokenError, TypeError, ValueError, AttributeError) as exc:
            log.info("tokens.rejected", error=str(exc))
            return jsonify({"error": str(exc)}), 400

        retagged = 0
        for token in tokens:
            new_kind = retag.get(token.kind)
            if new_kind is not None:
                token.kind = new_kind
                retagged += 1

        # ── Statistics ─────────────────────────────────────────────────────
        by_kind: dict[str, int] = {}
        out = []
        for token in tokens:
            record = to_record(token)
            by_kind[record["type"]] = by_kind.get(record["type"], 0) + 1
            record["display"] = str(token)
            record["debug"] = repr(token)
            out.append(record)

        log.debug("tokens.wrapped", total=len(out), retagged=retagged)
        return jsonify({
            "tokens": out,
            "stats": {
                "total":    len(out),
                "retagged": retagged,
                "by_kind":  by_kind,
            },
        })

    return app


def _describe(token: Token) -> dict:
    return {
        "kind":    token.kind,
        "name":    "T_" + token_name(token.kind),
        "display": str(token),
        "debug":   repr(token),
    }


# ── Dev-server entry-point ─────────────────────────────────────────────────
if __name__ == "__main__":
    configure_logging()
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "true").lower() == "true"
    log.info("server.start", url=f"http://127.0.0.1:{port}")
    create_app().run(host="0.0.0.0", port=port, debug=debug)
