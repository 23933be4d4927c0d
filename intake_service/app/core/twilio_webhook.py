import logging

from fastapi import Request, status
from fastapi.responses import Response
from twilio.request_validator import RequestValidator
from twilio.twiml.messaging_response import MessagingResponse

from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)

TWIML_MEDIA_TYPE = "text/xml"


def twiml_reply(message: str, status_code: int = status.HTTP_200_OK) -> Response:
    resp = MessagingResponse()
    resp.message(message)
    return Response(content=str(resp), media_type=TWIML_MEDIA_TYPE, status_code=status_code)


async def verify_twilio_signature(request: Request):
    """Dependency rejecting unsigned webhook calls when validation is enabled."""
    if not settings.TWILIO_VALIDATE_SIGNATURE:
        return

    if not settings.TWILIO_AUTH_TOKEN:
        logger.error("TWILIO_VALIDATE_SIGNATURE is on but TWILIO_AUTH_TOKEN is missing")
        error_response(
            message="Webhook signature validation is misconfigured",
            status_code=AppStatusCode.CONFIGURATION_ERROR,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    form = await request.form()
    signature = request.headers.get("X-Twilio-Signature", "")
    validator = RequestValidator(settings.TWILIO_AUTH_TOKEN)
    if not validator.validate(str(request.url), dict(form), signature):
        logger.warning("Rejected webhook call with invalid Twilio signature")
        error_response(
            message="Invalid Twilio signature",
            status_code=AppStatusCode.WEBHOOK_SIGNATURE_INVALID,
            http_status=status.HTTP_403_FORBIDDEN,
        )
