from __future__ import annotations

from typing import Optional

from flask import Blueprint, request, jsonify, g

from api.extensions import chirp_repo
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required
from utils.exceptions import ValidationFailure

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def parse_author_id() -> Optional[int]:
    raw = request.args.get("author_id")
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationFailure("Invalid author_id")


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long or body missing
      401:
        description: Unauthenticated
    """
    payload = request.get_json(silent=True) or {}
    data = chirp_create_schema.load(payload)

    chirp = chirp_repo().create(data["body"], g.current_user_id)
    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, optionally for one author
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: integer
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        default: asc
    responses:
      200:
        description: OK
      400:
        description: Invalid author_id or sort
    """
    chirps = chirp_repo().list(author_id=parse_author_id(), sort=request.args.get("sort", "asc"))
    return jsonify(chirps_out_schema.dump(chirps)), 200


@bp.get("/chirps/<int:chirp_id>")
def get_chirp(chirp_id: int):
    """
    Get a chirp by ID
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: integer
        required: true
    responses:
      200:
        description: OK
      404:
        description: Not found
    """
    chirp = chirp_repo().get(chirp_id)
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<int:chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: int):
    """
    Delete one of your own chirps
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: integer
        required: true
    responses:
      204:
        description: Deleted
      403:
        description: Not the author
      404:
        description: Not found
    """
    chirp_repo().delete(chirp_id, g.current_user_id)
    return ("", 204)
