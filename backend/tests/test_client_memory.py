"""
Noter Client — In-Memory Strategy Tests
=======================================

What:  InMemoryNoteStore / InMemoryNotesClient follow the same contract as
       the record handlers.
How:   Every test builds its own store; nothing is shared between tests.
"""

import pytest

from noter.client import InMemoryNoteStore, InMemoryNotesClient
from noter.exceptions import NotFoundError, ValidationError


@pytest.fixture
def client():
    return InMemoryNotesClient(InMemoryNoteStore())


class TestInMemoryContract:

    @pytest.mark.asyncio
    async def test_empty_store_lists_nothing(self, client):
        assert await client.list_notes() == []

    @pytest.mark.asyncio
    async def test_create_and_get_round_trip(self, client):
        created = await client.create_note("Title")

        fetched = await client.get_note(created.id)

        assert fetched.title == "Title"
        assert fetched.content == ""
        assert created.created_at == created.updated_at

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, client):
        notes = [await client.create_note(f"n{i}") for i in range(20)]

        assert len({n.id for n in notes}) == 20

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, ""])
    async def test_create_requires_title(self, client, title):
        with pytest.raises(ValidationError):
            await client.create_note(title, "content")

        assert await client.list_notes() == []

    @pytest.mark.asyncio
    async def test_update_content_keeps_title(self, client):
        created = await client.create_note("Keep", "old")

        updated = await client.update_note(created.id, content="x")

        assert updated.title == "Keep"
        assert updated.content == "x"
        assert updated.updated_at > created.updated_at
        assert updated.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, client):
        created = await client.create_note("t")

        with pytest.raises(ValidationError):
            await client.update_note(created.id)

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, client):
        created = await client.create_note("Bye")

        await client.delete_note(created.id)

        with pytest.raises(NotFoundError):
            await client.get_note(created.id)

    @pytest.mark.asyncio
    async def test_unknown_ids_are_not_found(self, client):
        with pytest.raises(NotFoundError):
            await client.get_note("nope")
        with pytest.raises(NotFoundError):
            await client.update_note("nope", content="x")
        with pytest.raises(NotFoundError):
            await client.delete_note("nope")

    @pytest.mark.asyncio
    async def test_unknown_id_checked_before_fields(self, client):
        with pytest.raises(NotFoundError):
            await client.update_note("nope")
        with pytest.raises(NotFoundError):
            await client.update_note("nope", title="")

    @pytest.mark.asyncio
    async def test_returned_notes_are_copies(self, client):
        created = await client.create_note("Original")
        created.title = "Mutated by caller"

        fetched = await client.get_note(created.id)

        assert fetched.title == "Original"


class TestStoreIsolation:

    def test_stores_do_not_share_state(self):
        first = InMemoryNoteStore()
        second = InMemoryNoteStore()

        first.create("only in first")

        assert len(first) == 1
        assert len(second) == 0

    def test_welcome_notes(self):
        store = InMemoryNoteStore.with_welcome_notes()

        titles = [n.title for n in store.list()]

        assert titles == ["Welcome to Noter", "How to use Noter"]

    def test_store_can_be_seeded(self):
        source = InMemoryNoteStore()
        note = source.create("seed", "body")

        copy = InMemoryNoteStore([note])

        assert copy.get(note.id).content == "body"
        copy.delete(note.id)
        assert source.get(note.id).title == "seed"
