from typing import List, Sequence, Union
from dynaconf.utils.boxing import DynaBox
from litestar.types.protocols import Logger
from pydantic_ai.direct import model_request
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelRequestPart,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from concierge.schemas.conversation import PromptMessage, Role


def to_model_messages(prompt: Sequence[PromptMessage]) -> List[ModelMessage]:
    """Convert prompt messages to pydantic-ai messages.

    Consecutive system and user messages share one ModelRequest; assistant
    messages become ModelResponses.
    """
    messages: List[ModelMessage] = []
    pending: List[ModelRequestPart] = []

    for message in prompt:
        if message.role == Role.SYSTEM:
            pending.append(SystemPromptPart(content=message.text))
        elif message.role == Role.USER:
            pending.append(UserPromptPart(content=message.text))
        else:
            if pending:
                messages.append(ModelRequest(parts=pending))
                pending = []
            messages.append(ModelResponse(parts=[TextPart(content=message.text)]))

    if pending:
        messages.append(ModelRequest(parts=pending))
    return messages


def model_settings_from_config(llm_config: DynaBox) -> ModelSettings:
    return ModelSettings(
        temperature=llm_config.get("temperature", 1.0),
        max_tokens=llm_config.get("max_tokens", 9399),
        top_p=llm_config.get("top_p", 1.0),
        frequency_penalty=llm_config.get("frequency_penalty", 0.0),
        presence_penalty=llm_config.get("presence_penalty", 0.0),
    )


class Assistant:
    """Completion backend: turns an assembled prompt into reply text."""

    def __init__(
        self,
        model: Union[Model, str],
        model_settings: ModelSettings,
        logger: Logger,
    ):
        self.model = model
        self.model_settings = model_settings
        self.logger = logger

    async def complete(self, prompt: Sequence[PromptMessage]) -> str:
        response = await model_request(
            self.model,
            to_model_messages(prompt),
            model_settings=self.model_settings,
        )

        reply = "".join(
            part.content for part in response.parts if isinstance(part, TextPart)
        ).strip()
        if not reply:
            raise ValueError("Model returned no text")

        self.logger.info(
            f"Completion from {response.model_name} ({len(prompt)} prompt messages)"
        )
        return reply
