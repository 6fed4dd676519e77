from typing import Annotated
from litestar import post, Request, Response
from litestar.di import Provide
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.status_codes import HTTP_200_OK, HTTP_400_BAD_REQUEST

from concierge.config import settings
from concierge.conversation.controller import ConversationController
from concierge.dependencies import get_controller
from concierge.outcome import TurnResult
from concierge.schemas.sms import SmsReceived, SmsDelivered, TwilioInbound

EMPTY_TWIML = '<?xml version="1.0" encoding="UTF-8"?><Response></Response>'


def rejected(result: TurnResult) -> Response:
    return Response(
        content=result.rejected or "Invalid request",
        media_type="text/plain",
        status_code=HTTP_400_BAD_REQUEST,
    )


@post(
    "/webhook/sms-proxy/received",
    dependencies={"controller": Provide(get_controller)},
)
async def handle_sms_proxy_received(
    request: Request, controller: ConversationController, data: SmsReceived
) -> Response:
    """Handle SMS received webhooks from sms-proxy."""
    request.logger.info(f"SMS received: {data.id} from {data.payload.phone_number}")

    result = await controller.handle(data.payload.phone_number, data.payload.message)
    if not result.accepted:
        return rejected(result)

    # Locally there's no phone on the other end, so hand the reply back to the caller
    content = (result.reply or "") if settings.ring == "local" else ""
    return Response(content=content, media_type="text/plain", status_code=HTTP_200_OK)


@post("/webhook/sms-proxy/delivered")
async def handle_sms_proxy_delivered(request: Request, data: SmsDelivered) -> Response:
    """Handle SMS delivered webhooks from sms-proxy."""
    request.logger.info(
        f"SMS {data.payload.message_id} delivered to {data.payload.phone_number}"
    )
    return Response(content="", media_type="text/plain", status_code=HTTP_200_OK)


@post(
    "/webhook/twilio",
    dependencies={"controller": Provide(get_controller)},
)
async def handle_twilio_received(
    request: Request,
    controller: ConversationController,
    data: Annotated[TwilioInbound, Body(media_type=RequestEncodingType.URL_ENCODED)],
) -> Response:
    """Handle inbound messaging webhooks from Twilio."""
    request.logger.info(f"SMS received: {data.message_sid or 'no sid'} from {data.from_}")

    result = await controller.handle(data.from_, data.body)
    if not result.accepted:
        return rejected(result)

    # Replies go out through the configured sender, never inline TwiML
    return Response(content=EMPTY_TWIML, media_type="text/xml", status_code=HTTP_200_OK)
