from dynaconf.utils.boxing import DynaBox
from litestar.types.protocols import Logger

from concierge.clients.base import SmsSender
from concierge.clients.console import ConsoleSender
from concierge.clients.sms_proxy import SmsProxySender, create_sms_proxy_client
from concierge.clients.twilio import TwilioSender


def create_sms_sender(sms_config: DynaBox, logger: Logger) -> SmsSender:
    """Instantiate the transport named by sms_config.transport."""
    transport = sms_config.get("transport", "console")

    if transport == "console":
        return ConsoleSender(logger)

    if transport == "sms_proxy":
        return SmsProxySender(create_sms_proxy_client(sms_config.proxy_url), logger)

    if transport == "twilio":
        twilio = sms_config.twilio
        if not (twilio.account_sid and twilio.auth_token and twilio.from_number):
            raise ValueError("Twilio transport needs account_sid, auth_token and from_number")
        return TwilioSender(
            TwilioSender.create_httpx_client(twilio.get("api_url", "https://api.twilio.com")),
            account_sid=twilio.account_sid,
            auth_token=twilio.auth_token,
            from_number=twilio.from_number,
            logger=logger,
        )

    raise ValueError(f"Unknown SMS transport: {transport}")
