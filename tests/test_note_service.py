"""
Noteful API: Note Service Unit Tests
=====================================

What:  NoteService business rules, checked against a mocked session and a
       mocked ReferenceValidator (no database).

What we test:
    ✅ Missing title is rejected before references are checked or rows written
    ✅ Invalid references stop the write
    ✅ Successful create returns the new note in wire form
    ✅ Malformed ids: 400 for get/update, silent no-op for delete
    ✅ Unknown or foreign note raises NotFoundError
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

from noteful.exceptions import InvalidFolderError, InvalidTagError, NotFoundError, ValidationError
from noteful.schemas.note import NoteWrite
from noteful.services.note_service import NoteService


def make_service(folder_uuid=None, tag_uuids=None, error=None) -> NoteService:
    references = MagicMock()
    if error is not None:
        references.validate = AsyncMock(side_effect=error)
    else:
        references.validate = AsyncMock(return_value=(folder_uuid, tag_uuids or []))
    return NoteService(references)


def assign_defaults_on_flush(session):
    """Mimics the column defaults a real flush would apply to added notes."""
    added = []
    session.add.side_effect = added.append

    async def flush():
        for row in added:
            row.id = row.id or uuid4()
            row.created_at = row.created_at or datetime.now(timezone.utc)

    session.flush = AsyncMock(side_effect=flush)
    return added


class TestNoteServiceCreate:
    @pytest.mark.asyncio
    async def test_missing_title_rejected_before_anything_else(self, mock_db_session):
        service = make_service()

        for title in (None, ""):
            with pytest.raises(ValidationError) as exc_info:
                await service.create_note(mock_db_session, uuid4(), NoteWrite(title=title))
            assert exc_info.value.field == "title"

        service.references.validate.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_folder_stops_the_write(self, mock_db_session):
        service = make_service(error=InvalidFolderError("nope"))

        with pytest.raises(InvalidFolderError):
            await service.create_note(
                mock_db_session, uuid4(), NoteWrite(title="Hi", folder_id="nope")
            )

        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_tag_stops_the_write(self, mock_db_session):
        service = make_service(error=InvalidTagError(["x"]))

        with pytest.raises(InvalidTagError):
            await service.create_note(mock_db_session, uuid4(), NoteWrite(title="Hi", tags=["x"]))

        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_success(self, mock_db_session):
        user_id = uuid4()
        folder_uuid = uuid4()
        service = make_service(folder_uuid=folder_uuid)
        added = assign_defaults_on_flush(mock_db_session)

        result = await service.create_note(
            mock_db_session,
            user_id,
            NoteWrite(title="Groceries", folder_id=str(folder_uuid)),
        )

        assert result.title == "Groceries"
        assert result.content == ""
        assert result.folder_id == folder_uuid
        assert result.tags == []
        assert len(added) == 1
        assert added[0].user_id == user_id
        service.references.validate.assert_awaited_once_with(user_id, str(folder_uuid), None)


class TestNoteServiceGet:
    def setup_method(self):
        self.service = make_service()

    @pytest.mark.asyncio
    async def test_malformed_id_is_validation_error(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.get_note(mock_db_session, uuid4(), "not-an-id")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session):
        note = MagicMock()
        note.id = uuid4()
        note.title = "Found"
        note.content = "body"
        note.created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        note.folder_id = None
        note.tags = []
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = note

        result = await self.service.get_note(mock_db_session, uuid4(), str(note.id))

        assert result.id == note.id
        assert result.title == "Found"

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session):
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, uuid4(), str(uuid4()))


class TestNoteServiceUpdate:
    @pytest.mark.asyncio
    async def test_empty_title_rejected(self, mock_db_session):
        service = make_service()

        with pytest.raises(ValidationError):
            await service.update_note(mock_db_session, uuid4(), str(uuid4()), NoteWrite(title=""))

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_note_raises_not_found(self, mock_db_session):
        service = make_service()
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = None

        with pytest.raises(NotFoundError):
            await service.update_note(
                mock_db_session, uuid4(), str(uuid4()), NoteWrite(title="New")
            )

        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_tag_stops_the_update(self, mock_db_session):
        service = make_service(error=InvalidTagError(["x"]))

        with pytest.raises(InvalidTagError):
            await service.update_note(
                mock_db_session, uuid4(), str(uuid4()), NoteWrite(title="New", tags=["x"])
            )

        mock_db_session.execute.assert_not_awaited()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_title_over_column_limit_rejected(self, mock_db_session):
        service = make_service()

        with pytest.raises(ValidationError) as exc_info:
            await service.update_note(
                mock_db_session, uuid4(), str(uuid4()), NoteWrite(title="x" * 501)
            )

        assert exc_info.value.message == "Must be at most 500 characters long"
        service.references.validate.assert_not_awaited()


class TestNoteServiceDelete:
    @pytest.mark.asyncio
    async def test_malformed_id_is_a_no_op(self, mock_db_session):
        service = make_service()

        await service.delete_note(mock_db_session, uuid4(), "garbage")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_is_scoped_to_owner(self, mock_db_session):
        service = make_service()
        mock_db_session.execute.return_value.rowcount = 0

        await service.delete_note(mock_db_session, uuid4(), str(uuid4()))

        mock_db_session.execute.assert_awaited_once()
