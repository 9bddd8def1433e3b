"""
Noter Backend — Note Service Unit Tests
=======================================

What:  Tests for NoteService (list, get, create, update, delete).
How:   Runs the service against a per-test in-memory SQLite session, and
       against a mock session where store failures are injected.

What we test:
    ✅ Create assigns unique ids and identical timestamps
    ✅ Missing/empty titles and empty updates are rejected
    ✅ Unknown ids raise NotFoundError for get/update/delete
    ✅ Updates merge fields and strictly advance updatedAt
    ✅ Store failures surface as ServerFaultError, never swallowed
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.exc import OperationalError

from noter.exceptions import NotFoundError, ServerFaultError, ValidationError
from noter.models.note import Note
from noter.schemas.note import NoteCreate, NoteUpdate
from noter.services.note_service import NoteService


class TestNoteServiceCreate:
    """Tests for create_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_success(self, db_session):
        note = await self.service.create_note(
            db_session, NoteCreate(title="Groceries", content="eggs")
        )

        assert note.title == "Groceries"
        assert note.content == "eggs"
        assert note.id
        assert note.created_at == note.updated_at

    @pytest.mark.asyncio
    async def test_create_note_defaults_content(self, db_session):
        note = await self.service.create_note(db_session, NoteCreate(title="Untitled body"))

        assert note.content == ""

    @pytest.mark.asyncio
    async def test_create_note_ids_are_unique(self, db_session):
        ids = set()
        for i in range(10):
            note = await self.service.create_note(db_session, NoteCreate(title=f"note {i}"))
            ids.add(note.id)

        assert len(ids) == 10

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, ""])
    async def test_create_note_requires_title(self, db_session, title):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create_note(db_session, NoteCreate(title=title, content="x"))

        assert exc_info.value.message == "Title is required"

    @pytest.mark.asyncio
    async def test_create_note_accepts_whitespace_title(self, db_session):
        note = await self.service.create_note(db_session, NoteCreate(title="   "))

        assert note.title == "   "

    @pytest.mark.asyncio
    async def test_create_note_store_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )

        with pytest.raises(ServerFaultError) as exc_info:
            await self.service.create_note(mock_db_session, NoteCreate(title="t"))

        assert exc_info.value.context["original_error"] == "OperationalError"
        assert "disk full" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_note_commit_failure(self, mock_db_session):
        mock_db_session.commit = AsyncMock(side_effect=RuntimeError("commit failed"))

        with pytest.raises(ServerFaultError) as exc_info:
            await self.service.create_note(mock_db_session, NoteCreate(title="t"))

        assert exc_info.value.context["operation"] == "create"

    @pytest.mark.asyncio
    async def test_create_note_is_committed(self, session_factory):
        async with session_factory() as writer:
            created = await self.service.create_note(writer, NoteCreate(title="Durable"))

        async with session_factory() as reader:
            fetched = await self.service.get_note(reader, created.id)

        assert fetched.title == "Durable"


class TestNoteServiceGet:
    """Tests for get_note retrieval."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_round_trip(self, db_session):
        created = await self.service.create_note(db_session, NoteCreate(title="Round trip"))

        fetched = await self.service.get_note(db_session, created.id)

        assert fetched.title == "Round trip"
        assert fetched.content == ""
        assert fetched.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, sample_note_data):
        """A record returned by the store is shaped into a NoteResponse."""
        mock_db_session.get = AsyncMock(return_value=Note(**sample_note_data))

        result = await self.service.get_note(mock_db_session, sample_note_data["id"])

        assert result.id == sample_note_data["id"]
        assert result.model_dump(by_alias=True)["createdAt"] == sample_note_data["created_at"]

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_note(db_session, "missing-id")

        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_get_note_requires_id(self, db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_note(db_session, "")

        assert exc_info.value.message == "Note ID is required"


class TestNoteServiceList:
    """Tests for list_notes."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, db_session):
        assert await self.service.list_notes(db_session) == []

    @pytest.mark.asyncio
    async def test_list_notes_in_creation_order(self, db_session):
        for title in ("first", "second", "third"):
            await self.service.create_note(db_session, NoteCreate(title=title))

        notes = await self.service.list_notes(db_session)

        assert [n.title for n in notes] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_list_notes_store_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=RuntimeError("connection reset"))

        with pytest.raises(ServerFaultError):
            await self.service.list_notes(mock_db_session)


class TestNoteServiceUpdate:
    """Tests for update_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_content_only(self, db_session):
        created = await self.service.create_note(
            db_session, NoteCreate(title="Keep me", content="old")
        )

        updated = await self.service.update_note(db_session, created.id, NoteUpdate(content="x"))

        assert updated.title == "Keep me"
        assert updated.content == "x"
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    @pytest.mark.asyncio
    async def test_update_title_only(self, db_session):
        created = await self.service.create_note(
            db_session, NoteCreate(title="Old", content="body")
        )

        updated = await self.service.update_note(db_session, created.id, NoteUpdate(title="New"))

        assert updated.title == "New"
        assert updated.content == "body"

    @pytest.mark.asyncio
    async def test_repeated_updates_strictly_advance(self, db_session):
        note = await self.service.create_note(db_session, NoteCreate(title="t"))
        previous = note.updated_at

        for i in range(5):
            note = await self.service.update_note(db_session, note.id, NoteUpdate(content=str(i)))
            assert note.updated_at > previous
            previous = note.updated_at

    @pytest.mark.asyncio
    async def test_update_requires_a_field(self, db_session):
        created = await self.service.create_note(db_session, NoteCreate(title="t"))

        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_note(db_session, created.id, NoteUpdate())

        assert "At least one field" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_update_rejects_empty_title(self, db_session):
        created = await self.service.create_note(db_session, NoteCreate(title="t"))

        with pytest.raises(ValidationError):
            await self.service.update_note(db_session, created.id, NoteUpdate(title=""))

    @pytest.mark.asyncio
    async def test_update_missing_note(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.update_note(db_session, "missing-id", NoteUpdate(content="x"))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [NoteUpdate(), NoteUpdate(title="")])
    async def test_update_missing_note_checked_before_fields(self, db_session, payload):
        with pytest.raises(NotFoundError):
            await self.service.update_note(db_session, "missing-id", payload)


class TestNoteServiceDelete:
    """Tests for delete_note."""

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, db_session):
        created = await self.service.create_note(db_session, NoteCreate(title="Bye"))

        await self.service.delete_note(db_session, created.id)

        with pytest.raises(NotFoundError):
            await self.service.get_note(db_session, created.id)

    @pytest.mark.asyncio
    async def test_delete_commits(self, mock_db_session, sample_note_data):
        mock_db_session.get = AsyncMock(return_value=MagicMock(id=sample_note_data["id"]))

        await self.service.delete_note(mock_db_session, sample_note_data["id"])

        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, db_session):
        with pytest.raises(NotFoundError):
            await self.service.delete_note(db_session, "missing-id")

    @pytest.mark.asyncio
    async def test_delete_does_not_touch_store_when_absent(self, mock_db_session):
        mock_db_session.get = AsyncMock(return_value=None)
        mock_db_session.delete = AsyncMock()

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_db_session, "missing-id")

        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_db_session, sample_note_data):
        mock_db_session.get = AsyncMock(return_value=MagicMock(id=sample_note_data["id"]))
        mock_db_session.delete = AsyncMock(side_effect=RuntimeError("lock timeout"))

        with pytest.raises(ServerFaultError):
            await self.service.delete_note(mock_db_session, sample_note_data["id"])
