import logging

from fastapi import APIRouter, Depends, Form, status
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.core.database import get_intake_db as get_db
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode
from ...core.summarizer import TitleSummarizer, get_title_summarizer
from ...core.twilio_webhook import twiml_reply, verify_twilio_signature
from ...crud.errors import NoOrganizationConfigured, TicketWriteError
from ...crud.intake import intake_crud as crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["WhatsApp Webhook"])

TICKET_FAILED_REPLY = "❌ Sorry, we could not log your request. Please try again shortly."


@router.post("/whatsapp", dependencies=[Depends(verify_twilio_signature)])
def whatsapp_webhook(
    body: str = Form("", alias="Body"),
    sender: str = Form("", alias="From"),
    db: Session = Depends(get_db),
    summarizer: TitleSummarizer | None = Depends(get_title_summarizer),
):
    if not body.strip() or not sender.strip():
        return error_response(
            message="Bad Request: Body and From are required",
            status_code=AppStatusCode.REQUIRED_VALIDATION_ERROR,
            http_status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        result = crud.process_inbound_message(db, sender, body, summarizer)
    except NoOrganizationConfigured as e:
        logger.error("Inbound message dropped: %s", e)
        return error_response(
            message=str(e),
            status_code=AppStatusCode.CONFIGURATION_ERROR,
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    except TicketWriteError as e:
        logger.error("Service request could not be stored: %s", e)
        reply = TICKET_FAILED_REPLY
        if settings.ECHO_STORE_ERRORS:
            reply = f"{reply} Error: {e}"
        return twiml_reply(reply)
    except Exception:
        logger.exception("Webhook runtime error")
        return twiml_reply(TICKET_FAILED_REPLY)

    return twiml_reply(result.reply)
