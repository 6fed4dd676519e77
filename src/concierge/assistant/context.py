from typing import List, Sequence

from concierge.schemas.conversation import MessageRecord, PromptMessage, Role, Sender


def assemble(
    system_instruction: str,
    history: Sequence[MessageRecord],
    new_message: str,
) -> List[PromptMessage]:
    """
    Build the prompt for a completion call.

    history is newest-first, as returned by MessageStore.recent. The result is
    the system instruction, then history oldest-first, then the new message.
    """
    prompt = [PromptMessage(Role.SYSTEM, system_instruction)]
    for record in reversed(history):
        role = Role.USER if record.sender == Sender.USER else Role.ASSISTANT
        prompt.append(PromptMessage(role, record.body))
    prompt.append(PromptMessage(Role.USER, new_message))
    return prompt
