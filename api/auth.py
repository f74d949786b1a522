"""
Authentication blueprint:
- POST /login    -> session token + refresh token (the user's previous refresh token stops working)
- POST /refresh  -> new session token for a live refresh token
- POST /revoke   -> delete a refresh token

Session tokens are JWTs (HS256) validated by utils.decorators.jwt_required.
Refresh tokens are opaque values stored in the document, one per user.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, abort

from api.extensions import auth_service
from models.schemas.user import UserCredentialsSchema, LoginOutSchema
from utils.decorators import get_bearer_token
from utils.exceptions import NotFound, Unauthorized

bp = Blueprint("auth", __name__)

user_credentials_schema = UserCredentialsSchema()
login_out_schema = LoginOutSchema()


@bp.post("/login")
def login():
    """
    Login: return a session token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Incorrect email or password
    """
    payload = request.get_json(silent=True) or {}
    data = user_credentials_schema.load(payload)

    try:
        result = auth_service().login(data["email"], data["password"])
    except Unauthorized as exc:
        # Same answer for unknown email and wrong password
        abort(401, description=exc.message)

    user = result.user
    return jsonify(
        login_out_schema.dump(
            {
                "id": user.id,
                "email": user.email,
                "is_upgraded": user.is_upgraded,
                "token": result.session_token,
                "refresh_token": result.refresh_token.opaque_value,
            }
        )
    ), 200


@bp.post("/refresh")
def refresh():
    """
    Trade a refresh token (Authorization: Bearer <refresh token>) for a new session token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unknown or expired refresh token
    """
    token = auth_service().refresh_session(get_bearer_token())
    return jsonify({"token": token}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token (Authorization: Bearer <refresh token>)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked, or already unknown
    """
    try:
        auth_service().revoke_refresh_token(get_bearer_token())
    except NotFound:
        pass
    return ("", 204)
