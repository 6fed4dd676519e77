"""Whole-app tests against the local ring: in-memory database, console transport."""

from litestar.testing import TestClient

from concierge.app import app
from concierge.conversation import script

PHONE = "+15551234567"


def sms_proxy_event(message: str) -> dict:
    return {
        "deviceId": "test-device",
        "id": "event-1",
        "payload": {
            "message": message,
            "receivedAt": "2025-08-29T06:20:00Z",
            "messageId": "msg-1",
            "phoneNumber": PHONE,
        },
    }


def test_health_echoes_correlation_id():
    with TestClient(app=app) as client:
        response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.status_code == 200
        assert response.text == "healthy"
        assert response.headers["X-Correlation-ID"] == "abc-123"

        generated = client.get("/health").headers["X-Correlation-ID"]
        assert len(generated) == 36


def test_opt_in_and_out_over_webhooks():
    with TestClient(app=app) as client:
        sender = client.app.state.sms_sender

        response = client.post(
            "/webhook/twilio",
            data={"From": PHONE, "Body": "Hello", "MessageSid": "SM1"},
        )
        assert response.status_code == 200
        assert "<Response>" in response.text

        response = client.post("/webhook/sms-proxy/received", json=sms_proxy_event("YES"))
        assert response.status_code == 200
        assert response.text == script.GREETING

        response = client.post("/webhook/twilio", data={"From": PHONE, "Body": "STOP"})
        assert response.status_code == 200

        assert sender.sent == [
            (PHONE, script.ONBOARDING_PROMPT),
            (PHONE, script.GREETING),
        ]


def test_invalid_requests_are_rejected():
    with TestClient(app=app) as client:
        response = client.post("/webhook/twilio", data={"From": PHONE, "Body": "  "})
        assert response.status_code == 400
        assert response.text == "Invalid request"

        response = client.post("/webhook/sms-proxy/received", json=sms_proxy_event(""))
        assert response.status_code == 400

        assert client.app.state.sms_sender.sent == []
