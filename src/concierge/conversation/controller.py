from typing import Optional, Protocol, Sequence
from litestar.types.protocols import Logger

from concierge.assistant.context import assemble
from concierge.clients.base import SmsSender
from concierge.conversation import script
from concierge.database.messages import MessageStore
from concierge.database.subscribers import SubscriberRegistry
from concierge.outcome import Delivery, TurnAction, TurnResult, safe_step
from concierge.schemas.conversation import PromptMessage, Sender


class CompletionBackend(Protocol):
    async def complete(self, prompt: Sequence[PromptMessage]) -> str: ...


def normalize(body: Optional[str]) -> str:
    return (body or "").strip().lower()


class ConversationController:
    """
    Per-number opt-in state machine.

    YES-class replies opt a number in and STOP opts it out, whatever its
    current state. Any other text from a number that isn't opted in gets the
    onboarding prompt. Opted-in numbers have their messages stored and
    forwarded to the assistant along with their recent history, and the reply
    is stored and texted back. Opt-in commands are never stored.

    Every accepted turn returns a TurnResult; nothing raises out of handle()
    for store, completion or transport failures. There is no locking between
    concurrent turns for the same number.
    """

    def __init__(
        self,
        registry: SubscriberRegistry,
        messages: MessageStore,
        assistant: CompletionBackend,
        sender: SmsSender,
        logger: Logger,
        memory_depth: int = script.MEMORY_DEPTH,
        system_instruction: str = script.SYSTEM_INSTRUCTION,
    ):
        self.registry = registry
        self.messages = messages
        self.assistant = assistant
        self.sender = sender
        self.logger = logger
        self.memory_depth = memory_depth
        self.system_instruction = system_instruction

    async def handle(self, address: Optional[str], body: Optional[str]) -> TurnResult:
        message = normalize(body)
        address = (address or "").strip()
        if not address or not message:
            self.logger.warning("Rejected inbound SMS with missing number or text")
            return TurnResult.reject("Invalid request")

        status = await self.registry.get_status(address)
        if not status.ok:
            result = TurnResult(delivery=Delivery.DROPPED, failed_steps=["get_status"])
        elif message in script.OPT_IN_TRIGGERS:
            result = await self._opt_in(address)
        elif message == script.OPT_OUT_TRIGGER:
            result = await self._opt_out(address)
        elif status.value:
            result = await self._assist(address, message)
        else:
            result = await self._onboard(address)

        self.logger.info(
            f"Turn for {address}: action={result.action.value if result.action else None} "
            f"delivery={result.delivery.value} failed={result.failed_steps}"
        )
        return result

    async def _opt_in(self, address: str) -> TurnResult:
        # Greets on every opt-in, including repeated ones
        result = TurnResult(action=TurnAction.OPT_IN)
        if not (await self.registry.set_status(address, True)).ok:
            result.drop("set_status")
            return result
        if (await self._send(address, script.GREETING)).ok:
            result.reply = script.GREETING
        else:
            result.degrade("send")
        return result

    async def _opt_out(self, address: str) -> TurnResult:
        result = TurnResult(action=TurnAction.OPT_OUT)
        if not (await self.registry.set_status(address, False)).ok:
            result.drop("set_status")
        return result

    async def _onboard(self, address: str) -> TurnResult:
        result = TurnResult(action=TurnAction.ONBOARD)
        if (await self._send(address, script.ONBOARDING_PROMPT)).ok:
            result.reply = script.ONBOARDING_PROMPT
        else:
            result.drop("send")
        return result

    async def _assist(self, address: str, message: str) -> TurnResult:
        result = TurnResult(action=TurnAction.ASSIST)

        stored = await self.messages.append(address, message, Sender.USER)
        if not stored.ok:
            result.degrade("append_user")

        recent = await self.messages.recent(address, self.memory_depth)
        if not recent.ok:
            result.degrade("recent")

        # The message just stored is passed separately as the new message
        history = [
            record
            for record in recent.value
            if stored.value is None or record.id != stored.value.id
        ]
        prompt = assemble(self.system_instruction, history, message)

        completion = await self._complete(prompt)
        if not completion.ok:
            result.drop("complete")
            return result
        reply = completion.value

        if not (await self.messages.append(address, reply, Sender.ASSISTANT)).ok:
            result.degrade("append_assistant")

        if (await self._send(address, reply)).ok:
            result.reply = reply
        else:
            result.degrade("send")
        return result

    @safe_step()
    async def _complete(self, prompt: Sequence[PromptMessage]) -> str:
        return await self.assistant.complete(prompt)

    @safe_step()
    async def _send(self, address: str, body: str) -> None:
        await self.sender.send(address, body)
