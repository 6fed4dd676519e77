from contextvars import ContextVar
import uuid
import logging
from litestar.middleware.base import ASGIMiddleware
from litestar.types import ASGIApp, Scope, Receive, Send, Message
from litestar.datastructures import MutableScopeHeaders

CORRELATION_HEADER = "X-Correlation-ID"

correlation_id_contextvar: ContextVar[str] = ContextVar("correlation_id")


class CorrelationFormatter(logging.Formatter):
    """Formatter that tolerates records logged outside a request."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "system"
        return super().format(record)


class CorrelationFilter(logging.Filter):
    """Stamps each record with the correlation ID of the turn that logged it."""

    def __init__(self, contextvar: ContextVar[str] = correlation_id_contextvar):
        super().__init__()
        self.contextvar = contextvar

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = self.contextvar.get("system")
        return True


def correlation_id_from_scope(scope: Scope) -> str:
    wanted = CORRELATION_HEADER.lower().encode("latin-1")
    for name, value in scope.get("headers", []):
        if name.lower() == wanted and value:
            return value.decode("latin-1")
    return str(uuid.uuid4())


class CorrelationMiddleware(ASGIMiddleware):
    """Gives every webhook call a correlation ID and echoes it back."""

    def __init__(self, contextvar: ContextVar[str] = correlation_id_contextvar):
        super().__init__()
        self.contextvar = contextvar

    async def handle(self, scope: Scope, receive: Receive, send: Send, next_app: ASGIApp) -> None:
        if scope["type"] != "http":
            await next_app(scope, receive, send)
            return

        correlation_id = correlation_id_from_scope(scope)
        token = self.contextvar.set(correlation_id)

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = MutableScopeHeaders.from_message(message=message)
                response_headers[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            await next_app(scope, receive, send_wrapper)
        finally:
            self.contextvar.reset(token)
