# gemini_relay/crud/__init__.py
from gemini_relay.crud.conversation import crud_conversation
from gemini_relay.crud.message import crud_message
from gemini_relay.crud.attachment import crud_attachment

__all__ = [
    "crud_conversation",
    "crud_message",
    "crud_attachment"
]
