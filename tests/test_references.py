"""
Noteful API: Reference Validator Tests
=======================================

Runs ReferenceValidator against a real SQLite database: ownership has to be
checked by the query, so mocking the session would prove nothing.
"""

import pytest
from uuid import uuid4

from noteful.exceptions import InvalidFolderError, InvalidTagError
from noteful.services.references import ReferenceValidator


class TestValidateFolder:
    @pytest.mark.asyncio
    async def test_no_folder_requested(self, database, alice):
        validator = ReferenceValidator(database)

        assert await validator.validate_folder(alice.id, None) is None
        assert await validator.validate_folder(alice.id, "") is None

    @pytest.mark.asyncio
    async def test_own_folder_accepted(self, database, alice, make_folder):
        folder = await make_folder(alice, "Work")

        result = await ReferenceValidator(database).validate_folder(alice.id, str(folder.id))

        assert result == folder.id

    @pytest.mark.asyncio
    async def test_foreign_unknown_and_malformed_rejected_alike(self, database, alice, bob, make_folder):
        bobs_folder = await make_folder(bob, "Work")
        validator = ReferenceValidator(database)

        for folder_id in (str(bobs_folder.id), str(uuid4()), "not-an-id"):
            with pytest.raises(InvalidFolderError) as exc_info:
                await validator.validate_folder(alice.id, folder_id)
            assert exc_info.value.message == "The folder is not valid"


class TestValidateTags:
    @pytest.mark.asyncio
    async def test_empty_list_accepted(self, database, alice):
        validator = ReferenceValidator(database)

        assert await validator.validate_tags(alice.id, None) == []
        assert await validator.validate_tags(alice.id, []) == []

    @pytest.mark.asyncio
    async def test_own_tags_accepted_and_deduplicated(self, database, alice, make_tag):
        foo = await make_tag(alice, "foo")
        bar = await make_tag(alice, "bar")

        result = await ReferenceValidator(database).validate_tags(
            alice.id, [str(foo.id), str(bar.id), str(foo.id)]
        )

        assert result == [foo.id, bar.id]

    @pytest.mark.asyncio
    async def test_one_foreign_tag_rejects_the_whole_list(self, database, alice, bob, make_tag):
        own = await make_tag(alice, "foo")
        foreign = await make_tag(bob, "foo")

        with pytest.raises(InvalidTagError) as exc_info:
            await ReferenceValidator(database).validate_tags(alice.id, [str(own.id), str(foreign.id)])

        assert exc_info.value.message == "The tag is not valid"

    @pytest.mark.asyncio
    async def test_malformed_tag_id_rejected(self, database, alice):
        with pytest.raises(InvalidTagError):
            await ReferenceValidator(database).validate_tags(alice.id, ["nope"])


class TestValidateBoth:
    @pytest.mark.asyncio
    async def test_returns_both_results(self, database, alice, make_folder, make_tag):
        folder = await make_folder(alice, "Work")
        tag = await make_tag(alice, "foo")

        folder_uuid, tag_uuids = await ReferenceValidator(database).validate(
            alice.id, str(folder.id), [str(tag.id)]
        )

        assert folder_uuid == folder.id
        assert tag_uuids == [tag.id]

    @pytest.mark.asyncio
    async def test_folder_error_wins_when_both_fail(self, database, alice):
        with pytest.raises(InvalidFolderError):
            await ReferenceValidator(database).validate(alice.id, str(uuid4()), [str(uuid4())])

    @pytest.mark.asyncio
    async def test_tag_error_alone(self, database, alice, make_folder):
        folder = await make_folder(alice, "Work")

        with pytest.raises(InvalidTagError):
            await ReferenceValidator(database).validate(alice.id, str(folder.id), [str(uuid4())])
