from datetime import datetime, timezone

from concierge.assistant.context import assemble
from concierge.schemas.conversation import MessageRecord, PromptMessage, Role, Sender


def record(body: str, sender: Sender) -> MessageRecord:
    return MessageRecord(
        address="+15551234567",
        body=body,
        sender=sender,
        received_at=datetime(2025, 8, 29, 6, 20, tzinfo=timezone.utc),
    )


def test_empty_history():
    assert assemble("S", [], "hi") == [
        PromptMessage(Role.SYSTEM, "S"),
        PromptMessage(Role.USER, "hi"),
    ]


def test_user_then_assistant_exchange():
    # "a" was sent before "b", so newest-first the assistant reply comes first
    history = [record("b", Sender.ASSISTANT), record("a", Sender.USER)]

    assert assemble("S", history, "c") == [
        PromptMessage(Role.SYSTEM, "S"),
        PromptMessage(Role.USER, "a"),
        PromptMessage(Role.ASSISTANT, "b"),
        PromptMessage(Role.USER, "c"),
    ]


def test_history_is_reversed_before_new_message():
    history = [record("a", Sender.USER), record("b", Sender.ASSISTANT)]

    assert assemble("S", history, "c") == [
        PromptMessage(Role.SYSTEM, "S"),
        PromptMessage(Role.ASSISTANT, "b"),
        PromptMessage(Role.USER, "a"),
        PromptMessage(Role.USER, "c"),
    ]


def test_newest_first_history_comes_out_chronological():
    # As returned by MessageStore.recent: newest first
    history = [
        record("hello!", Sender.ASSISTANT),
        record("hi", Sender.USER),
    ]

    prompt = assemble("You are a homeless assistant", history, "how are you")

    assert [(m.role, m.text) for m in prompt] == [
        (Role.SYSTEM, "You are a homeless assistant"),
        (Role.USER, "hi"),
        (Role.ASSISTANT, "hello!"),
        (Role.USER, "how are you"),
    ]


def test_assemble_does_not_mutate_history():
    history = [record("later", Sender.ASSISTANT), record("earlier", Sender.USER)]
    snapshot = list(history)

    assemble("S", history, "now")
    assemble("S", history, "now")

    assert history == snapshot
