from flask import Blueprint, request

from api.extensions import user_repo
from models.schemas.webhook import PolkaEventSchema, USER_UPGRADED
from utils.decorators import api_key_required
from utils.exceptions import ValidationFailure

bp = Blueprint("webhooks", __name__)

polka_event_schema = PolkaEventSchema()


@bp.post("/polka/webhooks")
@api_key_required("POLKA_KEY")
def polka_webhook():
    """
    Payment provider callback. `user.upgraded` marks the user as upgraded;
    every other event is acknowledged and ignored.
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: integer }
    responses:
      204:
        description: Acknowledged
      401:
        description: Bad API key
      404:
        description: Unknown user
    """
    payload = request.get_json(silent=True) or {}
    event = polka_event_schema.load(payload)
    if event["event"] != USER_UPGRADED:
        return ("", 204)
    if not event.get("data"):
        raise ValidationFailure("data.user_id is required")

    user_repo().upgrade(event["data"]["user_id"])
    return ("", 204)
