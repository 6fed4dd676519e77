from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SmsDeliveredPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    delivered_at: str
    message_id: str
    phone_number: str


class SmsDelivered(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    device_id: str
    id: str
    payload: SmsDeliveredPayload


class SmsReceivedPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Missing text is rejected by the controller rather than by schema validation
    message: str = ""
    received_at: str
    message_id: str
    phone_number: str = ""


class SmsReceived(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    device_id: str
    id: str
    payload: SmsReceivedPayload


class TwilioInbound(BaseModel):
    """Form fields posted by a Twilio messaging webhook. Only sender and text are read."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_: str = Field(default="", alias="From")
    body: str = Field(default="", alias="Body")
    message_sid: str = Field(default="", alias="MessageSid")
