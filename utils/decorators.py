from __future__ import annotations
import hmac
from functools import wraps
from flask import request, g, current_app

from utils.exceptions import Unauthenticated


def get_authorization(scheme: str) -> str:
    """Return the credential of an `Authorization: <scheme> <credential>` header."""
    auth = request.headers.get("Authorization", "")
    prefix = f"{scheme} "
    if not auth.startswith(prefix):
        raise Unauthenticated("Missing or invalid Authorization header")
    credential = auth[len(prefix):].strip()
    if not credential:
        raise Unauthenticated("Missing or invalid Authorization header")
    return credential


def get_bearer_token() -> str:
    return get_authorization("Bearer")


def jwt_required():
    """Require a valid session token; exposes g.current_user_id and g.session_claims."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = get_bearer_token()
            claims = current_app.extensions["chirpy.auth"].validate_session_token(token)
            g.session_claims = claims
            g.current_user_id = claims.subject
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required(config_key: str = "POLKA_KEY"):
    """Require `Authorization: ApiKey <key>` matching app.config[config_key]."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            expected = current_app.config.get(config_key) or ""
            provided = get_authorization("ApiKey")
            if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
                raise Unauthenticated("Invalid API key")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
