from litestar import Litestar
from litestar.logging import LoggingConfig

from concierge.lifespan import lifespan
from concierge.routes.health import health
from concierge.routes.webhook import (
    handle_sms_proxy_received,
    handle_sms_proxy_delivered,
    handle_twilio_received,
)
from concierge.logging_middleware import (
    CorrelationFilter,
    CorrelationFormatter,
    CorrelationMiddleware,
    correlation_id_contextvar,
)

logging_config = LoggingConfig(
    root={
        "level": "INFO",
        "handlers": ["queue_listener"],
        "filters": ["correlation"],
    },
    formatters={
        "standard": {
            "()": CorrelationFormatter,
            "format": "%(asctime)s - %(correlation_id)s - %(levelname)s - %(message)s",
        }
    },
    filters={
        "correlation": {
            "()": CorrelationFilter,
            "contextvar": correlation_id_contextvar,
        }
    },
    loggers={
        # Client libraries log on their own loggers; give them the turn's correlation ID too
        "httpx": {"level": "INFO", "filters": ["correlation"], "propagate": True},
        "uvicorn": {"level": "INFO", "filters": ["correlation"], "propagate": True},
        "litestar": {"level": "INFO", "filters": ["correlation"], "propagate": True},
        "pydantic_ai": {"level": "WARNING", "filters": ["correlation"], "propagate": True},
    },
    log_exceptions="always",
)

app = Litestar(
    route_handlers=[
        health,
        handle_sms_proxy_received,
        handle_sms_proxy_delivered,
        handle_twilio_received,
    ],
    lifespan=[lifespan],
    logging_config=logging_config,
    middleware=[CorrelationMiddleware(correlation_id_contextvar)],
)
