from litestar.datastructures import State
from concierge.conversation.controller import ConversationController


async def get_controller(state: State) -> ConversationController:
    return state.controller
