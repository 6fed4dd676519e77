from contextlib import asynccontextmanager
from typing import AsyncGenerator
import asyncio
from litestar import Litestar

from concierge.config import settings
from concierge.assistant.llm import Assistant, model_settings_from_config
from concierge.clients.registry import create_sms_sender
from concierge.clients.sms_proxy import SmsProxySender, register_and_maintain
from concierge.conversation.controller import ConversationController
from concierge.database.manager import create_db_pool
from concierge.database.messages import MessageStore
from concierge.database.subscribers import SubscriberRegistry


@asynccontextmanager
async def lifespan(app: Litestar) -> AsyncGenerator[None, None]:
    logger = app.logger
    if logger is None:
        raise RuntimeError("App logger is None")

    db_pool = await create_db_pool(
        settings.messages_db, logger, in_memory=settings.ring == "local"
    )

    sender = create_sms_sender(settings.sms, logger)
    logger.info("Using SMS transport %s", sender.name)

    assistant = Assistant(
        settings.llm.model, model_settings_from_config(settings.llm), logger
    )

    controller = ConversationController(
        registry=SubscriberRegistry(db_pool, logger),
        messages=MessageStore(db_pool, logger),
        assistant=assistant,
        sender=sender,
        logger=logger,
        memory_depth=settings.memory_depth,
    )

    # Keep the sms-proxy registration alive so inbound SMS reach our webhook
    registration_task = None
    if isinstance(sender, SmsProxySender) and settings.ring != "local":
        registration_task = asyncio.create_task(
            register_and_maintain(
                sender.client,
                client_id=f"concierge-{settings.ring}",
                webhook_url=f"{settings.webhook.base_url}/webhook/sms-proxy",
                ring=settings.ring,
                logger=logger,
                on_received=True,
                on_delivered=True,
            )
        )

    app.state.sms_sender = sender
    app.state.assistant = assistant
    app.state.controller = controller
    app.state.db_pool = db_pool

    try:
        yield
    finally:
        if registration_task:
            registration_task.cancel()
            try:
                await registration_task
            except asyncio.CancelledError:
                pass

        await sender.aclose()
        await db_pool.close()
