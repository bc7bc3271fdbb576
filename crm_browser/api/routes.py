from __future__ import annotations

import logging
from typing import Any, Tuple

from flask import Blueprint, jsonify, request

from crm_browser.core.exceptions import RecordNotFoundError, UnknownCollectionError
from crm_browser.core.records import require_collection, singular
from crm_browser.services.record_store import JsonRecordStore
from crm_browser.validation.errors import ValidationError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _error(message: str, status: int, **extra: Any) -> Tuple[Any, int]:
    return jsonify({"error": message, **extra}), status


def _not_found(kind: str) -> Tuple[Any, int]:
    return _error(f"{singular(kind).capitalize()} not found", 404)


def _invalid(kind: str, e: ValidationError) -> Tuple[Any, int]:
    return _error(f"Invalid {singular(kind)} data", 400, details=e.to_details())


def create_api_blueprint(store: JsonRecordStore) -> Blueprint:
    """
    REST endpoints over the JSON record store:

        GET    /api/<collection>
        POST   /api/<collection>
        GET    /api/<collection>/<id>
        PUT    /api/<collection>/<id>
        DELETE /api/<collection>/<id>
    """
    bp = Blueprint("crm_api", __name__, url_prefix=API_PREFIX)

    @bp.errorhandler(UnknownCollectionError)
    def _unknown_collection(e: UnknownCollectionError):
        return _error(str(e), 404)

    @bp.route("/<collection>", methods=["GET"])
    def list_records(collection: str):
        kind = require_collection(collection)
        try:
            return jsonify(store.list(kind))
        except ValidationError as e:
            logger.error(
                "Stored records failed validation",
                extra={"collection": kind, "issues": e.to_details()},
            )
            return _error("Invalid data format", 400)
        except ValueError:
            logger.exception("Stored collection is malformed", extra={"collection": kind})
            return _error("Invalid data format", 400)
        except Exception:
            logger.exception("Error fetching records", extra={"collection": kind})
            return _error(f"Failed to fetch {kind}", 500)

    @bp.route("/<collection>", methods=["POST"])
    def create_record(collection: str):
        kind = require_collection(collection)
        try:
            return jsonify(store.create(kind, request.get_json(silent=True)))
        except ValidationError as e:
            return _invalid(kind, e)
        except Exception:
            logger.exception("Error creating record", extra={"collection": kind})
            return _error(f"Failed to create {singular(kind)}", 500)

    @bp.route("/<collection>/<int:record_id>", methods=["GET"])
    def get_record(collection: str, record_id: int):
        kind = require_collection(collection)
        try:
            return jsonify(store.get(kind, record_id))
        except RecordNotFoundError:
            return _not_found(kind)
        except ValidationError as e:
            return _invalid(kind, e)
        except Exception:
            logger.exception("Error fetching record", extra={"collection": kind, "record_id": record_id})
            return _error(f"Failed to fetch {singular(kind)}", 500)

    @bp.route("/<collection>/<int:record_id>", methods=["PUT"])
    def update_record(collection: str, record_id: int):
        kind = require_collection(collection)
        try:
            return jsonify(store.update(kind, record_id, request.get_json(silent=True)))
        except RecordNotFoundError:
            return _not_found(kind)
        except ValidationError as e:
            return _invalid(kind, e)
        except Exception:
            logger.exception("Error updating record", extra={"collection": kind, "record_id": record_id})
            return _error(f"Failed to update {singular(kind)}", 500)

    @bp.route("/<collection>/<int:record_id>", methods=["DELETE"])
    def delete_record(collection: str, record_id: int):
        kind = require_collection(collection)
        try:
            store.delete(kind, record_id)
        except RecordNotFoundError:
            return _not_found(kind)
        except Exception:
            logger.exception("Error deleting record", extra={"collection": kind, "record_id": record_id})
            return _error(f"Failed to delete {singular(kind)}", 500)
        return jsonify({"success": True})

    return bp
