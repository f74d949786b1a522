from __future__ import annotations

from flask import Blueprint, request, jsonify, g

from api.extensions import auth_service
from models.schemas.user import UserCredentialsSchema, UserOutSchema
from utils.decorators import jwt_required

bp = Blueprint("users", __name__)

user_credentials_schema = UserCredentialsSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def create_user():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = user_credentials_schema.load(payload)

    user = auth_service().register(data["email"], data["password"])
    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the email and password of the authenticated user.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthenticated
      409:
        description: Email belongs to another user
    """
    payload = request.get_json(silent=True) or {}
    data = user_credentials_schema.load(payload)

    user = auth_service().update_credentials(g.current_user_id, data["email"], data["password"])
    return jsonify(user_out_schema.dump(user)), 200
