import asyncio

import pytest

from gemini_relay.core.exceptions import ExternalServiceError, ValidationError
from gemini_relay.crud import crud_conversation, crud_message
from gemini_relay.db.models import ROLE_EXTERNAL_AI, ROLE_USER
from gemini_relay.services import chat_orchestrator
from gemini_relay.services import conversation as conversation_service


def test_first_turn_creates_conversation_with_title_prefix(run_db, fake_gateway, count_rows):
    text = "Summarize the quarterly report for the board meeting"

    async def scenario(session_factory):
        async with session_factory() as db:
            reply = await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text=text)
            conversation = await crud_conversation.get_by_session_id(db, session_id="s-1")
            return reply, conversation

    reply, conversation = run_db(scenario)

    assert reply.role == ROLE_EXTERNAL_AI == "gemini3"
    assert reply.content == f"echo: {text}"
    assert reply.session_id == "s-1"
    assert conversation is not None
    assert conversation.title == text[:30]
    assert conversation.is_deleted is False
    assert count_rows("conversations") == 1
    assert count_rows("messages") == 2


def test_reply_is_tagged_with_model_variant(run_db, fake_gateway):
    async def scenario(session_factory):
        async with session_factory() as db:
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="hi")
            return await crud_message.get_session_messages(db, session_id="s-1")

    user_message, reply = run_db(scenario)

    assert user_message.role == ROLE_USER
    assert user_message.sender_ai is None
    assert reply.role == ROLE_EXTERNAL_AI
    assert reply.sender_ai == "gemini-test"


def test_prompt_is_raw_text_without_history(run_db, fake_gateway):
    async def scenario(session_factory):
        async with session_factory() as db:
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="first")
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="second")

    run_db(scenario)

    assert fake_gateway.prompts == ["first", "second"]


def test_sequential_turns_overwrite_title(run_db, fake_gateway, count_rows):
    async def scenario(session_factory):
        async with session_factory() as db:
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="Project kickoff agenda")
            first = await crud_conversation.get_by_session_id(db, session_id="s-1")
            first_updated = first.updated_at
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="Follow-up questions about budget and hiring")
            db.expire_all()
            second = await crud_conversation.get_by_session_id(db, session_id="s-1")
            return first_updated, second

    first_updated, conversation = run_db(scenario)

    assert conversation.title == "Follow-up questions about budget and hiring"[:30]
    assert conversation.updated_at >= first_updated
    assert count_rows("conversations") == 1
    assert count_rows("messages") == 4


def test_concurrent_turns_keep_one_conversation_last_write_wins(run_db, fake_gateway, count_rows):
    fake_gateway.delay = 0.01
    texts = ["Alpha message from tab one", "Bravo message from tab two"]

    async def turn(session_factory, text):
        async with session_factory() as db:
            return await chat_orchestrator.send_turn(db, fake_gateway, session_id="shared", text=text)

    async def scenario(session_factory):
        await asyncio.gather(*(turn(session_factory, text) for text in texts))
        async with session_factory() as db:
            return await crud_conversation.get_by_session_id(db, session_id="shared")

    conversation = run_db(scenario)

    assert conversation.title in {text[:30] for text in texts}
    assert count_rows("conversations") == 1
    assert count_rows("messages") == 4


def test_gateway_failure_keeps_user_message_only(run_db, fake_gateway, count_rows):
    fake_gateway.fail = True

    async def scenario(session_factory):
        async with session_factory() as db:
            with pytest.raises(ExternalServiceError):
                await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="anyone there?")
        async with session_factory() as db:
            thread = await conversation_service.get_thread(db, session_id="s-1")
            conversation = await crud_conversation.get_by_session_id(db, session_id="s-1")
            return thread, conversation

    thread, conversation = run_db(scenario)

    assert [(msg.role, msg.content) for msg in thread] == [("user", "anyone there?")]
    assert conversation is None
    assert count_rows("conversations") == 0


def test_failed_turn_does_not_touch_existing_conversation(run_db, fake_gateway):
    async def scenario(session_factory):
        async with session_factory() as db:
            await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="original title")
            fake_gateway.fail = True
            with pytest.raises(ExternalServiceError):
                await chat_orchestrator.send_turn(db, fake_gateway, session_id="s-1", text="never becomes the title")
        async with session_factory() as db:
            return await crud_conversation.get_by_session_id(db, session_id="s-1")

    conversation = run_db(scenario)

    assert conversation.title == "original title"


@pytest.mark.parametrize(
    "session_id, text",
    [(None, "hello"), ("", "hello"), ("s-1", None), ("s-1", "")],
)
def test_missing_input_is_rejected_without_side_effects(run_db, fake_gateway, count_rows, session_id, text):
    async def scenario(session_factory):
        async with session_factory() as db:
            with pytest.raises(ValidationError):
                await chat_orchestrator.send_turn(db, fake_gateway, session_id=session_id, text=text)

    run_db(scenario)

    assert fake_gateway.prompts == []
    assert count_rows("messages") == 0
    assert count_rows("conversations") == 0


def test_attachment_references_are_stored_as_given(run_db, fake_gateway):
    async def scenario(session_factory):
        async with session_factory() as db:
            await chat_orchestrator.send_turn(
                db, fake_gateway, session_id="s-1", text="see files", attachment_ids=[3, None, "not-an-id", ""]
            )
            return await crud_message.get_session_messages(db, session_id="s-1")

    user_message, reply = run_db(scenario)

    assert user_message.attachment_ids == [3, "not-an-id"]
    assert reply.attachment_ids == []
