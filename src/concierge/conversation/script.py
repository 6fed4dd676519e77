"""Fixed wording of the opt-in flow and the assistant persona."""

OPT_IN_TRIGGERS = frozenset({"yes", "yeah", "y-e-a-h"})
OPT_OUT_TRIGGER = "stop"

GREETING = "How can I help you?"
ONBOARDING_PROMPT = (
    "Thank you for texting us. We're happy to help. "
    "Reply YES to opt-in. Reply STOP to stop."
)

SYSTEM_INSTRUCTION = "You are a homeless assistant"

MEMORY_DEPTH = 3
