#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tests for the SQLite chat store.
"""
import pytest

from services.chat_store import ChatStore
from utils.errors import ChatNotFoundError, StorageError


def test_init_db_creates_parent_directory(mock_settings, tmp_path):
    settings = mock_settings.model_copy(update={"database_path": tmp_path / "nested" / "dir" / "db.sqlite"})
    ChatStore(settings).init_db()
    assert settings.database_path.exists()


def test_init_db_is_idempotent(store):
    store.create_chat("first")
    store.init_db()
    assert store.count_chats() == 1


def test_schema_created_on_first_use(mock_settings):
    store = ChatStore(mock_settings)
    assert not mock_settings.database_path.exists()

    chat = store.create_chat("no explicit init")

    assert mock_settings.database_path.exists()
    assert store.get_chat(chat["id"])["title"] == "no explicit init"
    assert store.count_reviews() == 0


def test_create_and_get_chat(store):
    chat = store.create_chat("Earbuds question")

    assert chat["title"] == "Earbuds question"
    assert chat["created_at"] == chat["updated_at"]
    assert store.get_chat(chat["id"]) == chat
    assert store.get_chat("missing") is None


def test_list_chats_most_recent_first(store):
    older = store.create_chat("older")
    newer = store.create_chat("newer")

    assert [c["id"] for c in store.list_chats()] == [newer["id"], older["id"]]

    store.touch_chat(older["id"])
    assert [c["id"] for c in store.list_chats()] == [older["id"], newer["id"]]


def test_messages_round_trip_in_order(store):
    chat = store.create_chat("chat")
    analysis = {"productName": "무선 이어폰", "pros": ["가볍다"]}

    first = store.add_message(chat["id"], "user", "이어폰 어때요?", "text")
    second = store.add_message(chat["id"], "assistant", "완료", "analysis", analysis)

    messages = store.list_messages(chat["id"])
    assert [m["id"] for m in messages] == [first, second]
    assert messages[0]["analysis_data"] is None
    assert messages[0]["type"] == "text"
    assert messages[1]["analysis_data"] == analysis
    assert messages[1]["role"] == "assistant"
    assert messages[1]["chat_id"] == chat["id"]


def test_list_messages_unknown_chat(store):
    with pytest.raises(ChatNotFoundError):
        store.list_messages("missing")


def test_add_message_unknown_chat(store):
    with pytest.raises(StorageError):
        store.add_message("missing", "user", "hi")


def test_add_message_rejects_bad_role(store):
    chat = store.create_chat("chat")
    with pytest.raises(StorageError):
        store.add_message(chat["id"], "system", "hi")


def test_delete_chat_cascades_messages(store):
    chat = store.create_chat("chat")
    store.add_message(chat["id"], "user", "hi")

    assert store.delete_chat(chat["id"]) is True
    assert store.get_chat(chat["id"]) is None
    with store.get_conn() as conn:
        remaining = conn.execute("SELECT COUNT(*) FROM messages").fetchone()[0]
    assert remaining == 0


def test_delete_unknown_chat(store):
    assert store.delete_chat("missing") is False


def test_upsert_reviews_replaces_on_id(store):
    row = {
        "id": "r-1", "title": "Earbuds", "content": "good", "rating": 5, "author": "Alice",
        "date": "2024-03-02T00:00:00+00:00", "helpful_votes": 1, "verified_purchase": True,
    }
    assert store.upsert_reviews([row]) == 1
    assert store.upsert_reviews([dict(row, content="updated", rating=None)]) == 1
    assert store.count_reviews() == 1

    with store.get_conn() as conn:
        saved = dict(conn.execute("SELECT * FROM reviews WHERE id = 'r-1'").fetchone())
    assert saved["content"] == "updated"
    assert saved["rating"] is None
    assert saved["verified_purchase"] == 1


def test_upsert_reviews_empty(store):
    assert store.upsert_reviews([]) == 0


def test_upsert_reviews_failure_raises_storage_error(store):
    # title is NOT NULL
    with pytest.raises(StorageError):
        store.upsert_reviews([{"id": "r-1", "title": None, "content": "x", "author": "a", "date": "d"}])
