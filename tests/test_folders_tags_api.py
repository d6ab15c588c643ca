"""
Noteful API: Folder and Tag Endpoint Tests
===========================================

Folders and tags share one service implementation, so most cases run
against both resources through parametrization.
"""

import pytest
from uuid import uuid4

RESOURCES = ["folders", "tags"]


@pytest.mark.parametrize("resource", RESOURCES)
class TestNamedResourceCrud:
    @pytest.mark.asyncio
    async def test_create_list_get(self, test_client, alice, auth_headers, resource):
        headers = auth_headers(alice)

        created = await test_client.post(f"/api/{resource}", json={"name": "Work"}, headers=headers)
        await test_client.post(f"/api/{resource}", json={"name": "Archive"}, headers=headers)

        assert created.status_code == 201
        row_id = created.json()["id"]
        assert created.headers["Location"] == f"/api/{resource}/{row_id}"

        listing = await test_client.get(f"/api/{resource}", headers=headers)
        assert [row["name"] for row in listing.json()] == ["Archive", "Work"]

        fetched = await test_client.get(f"/api/{resource}/{row_id}", headers=headers)
        assert fetched.json() == {"id": row_id, "name": "Work"}

    @pytest.mark.asyncio
    async def test_missing_name(self, test_client, alice, auth_headers, resource):
        for body in ({}, {"name": ""}, {"name": "   "}):
            response = await test_client.post(f"/api/{resource}", json=body, headers=auth_headers(alice))
            assert response.status_code == 400
            assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_duplicate_name_per_user_conflicts(self, test_client, alice, bob, auth_headers, resource):
        first = await test_client.post(f"/api/{resource}", json={"name": "Work"}, headers=auth_headers(alice))
        dupe = await test_client.post(f"/api/{resource}", json={"name": "Work"}, headers=auth_headers(alice))
        other_user = await test_client.post(f"/api/{resource}", json={"name": "Work"}, headers=auth_headers(bob))

        assert first.status_code == 201
        assert dupe.status_code == 409
        assert dupe.json()["error"] == "conflict"
        assert other_user.status_code == 201

    @pytest.mark.asyncio
    async def test_rename(self, test_client, alice, auth_headers, resource):
        headers = auth_headers(alice)
        created = await test_client.post(f"/api/{resource}", json={"name": "Old"}, headers=headers)
        row_id = created.json()["id"]

        renamed = await test_client.put(f"/api/{resource}/{row_id}", json={"name": "New"}, headers=headers)

        assert renamed.status_code == 200
        assert renamed.json() == {"id": row_id, "name": "New"}

    @pytest.mark.asyncio
    async def test_rename_to_taken_name_conflicts(self, test_client, alice, auth_headers, resource):
        headers = auth_headers(alice)
        await test_client.post(f"/api/{resource}", json={"name": "Taken"}, headers=headers)
        created = await test_client.post(f"/api/{resource}", json={"name": "Free"}, headers=headers)

        response = await test_client.put(
            f"/api/{resource}/{created.json()['id']}", json={"name": "Taken"}, headers=headers
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_other_users_row_is_not_found(self, test_client, alice, bob, auth_headers, resource):
        created = await test_client.post(f"/api/{resource}", json={"name": "Bob's"}, headers=auth_headers(bob))
        row_id = created.json()["id"]

        fetched = await test_client.get(f"/api/{resource}/{row_id}", headers=auth_headers(alice))
        renamed = await test_client.put(
            f"/api/{resource}/{row_id}", json={"name": "Alice's"}, headers=auth_headers(alice)
        )

        assert fetched.status_code == 404
        assert renamed.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, test_client, alice, bob, auth_headers, resource):
        created = await test_client.post(f"/api/{resource}", json={"name": "Bob's"}, headers=auth_headers(bob))

        for row_id in (str(uuid4()), "nope", created.json()["id"]):
            response = await test_client.delete(f"/api/{resource}/{row_id}", headers=auth_headers(alice))
            assert response.status_code == 204

        survivor = await test_client.get(f"/api/{resource}/{created.json()['id']}", headers=auth_headers(bob))
        assert survivor.status_code == 200


class TestDeleteDetachesNotes:
    @pytest.mark.asyncio
    async def test_deleting_folder_keeps_its_notes(self, test_client, alice, auth_headers, make_folder, make_note):
        folder = await make_folder(alice, "Work")
        note = await make_note(alice, "Filed", folder=folder)
        headers = auth_headers(alice)

        response = await test_client.delete(f"/api/folders/{folder.id}", headers=headers)

        assert response.status_code == 204
        survivor = await test_client.get(f"/api/notes/{note.id}", headers=headers)
        assert survivor.status_code == 200
        assert survivor.json()["folderId"] is None

    @pytest.mark.asyncio
    async def test_deleting_tag_removes_it_from_notes(self, test_client, alice, auth_headers, make_tag):
        foo = await make_tag(alice, "foo")
        bar = await make_tag(alice, "bar")
        headers = auth_headers(alice)
        created = await test_client.post(
            "/api/notes", json={"title": "Tagged", "tags": [str(foo.id), str(bar.id)]}, headers=headers
        )

        response = await test_client.delete(f"/api/tags/{foo.id}", headers=headers)

        assert response.status_code == 204
        survivor = await test_client.get(f"/api/notes/{created.json()['id']}", headers=headers)
        assert [tag["name"] for tag in survivor.json()["tags"]] == ["bar"]


@pytest.mark.parametrize("resource", RESOURCES)
class TestNameLength:
    @pytest.mark.asyncio
    async def test_name_over_column_limit_rejected(self, test_client, alice, auth_headers, resource):
        headers = auth_headers(alice)

        too_long = await test_client.post(f"/api/{resource}", json={"name": "n" * 256}, headers=headers)
        at_limit = await test_client.post(f"/api/{resource}", json={"name": "n" * 255}, headers=headers)

        assert too_long.status_code == 400
        assert too_long.json()["message"] == "Must be at most 255 characters long"
        assert at_limit.status_code == 201

    @pytest.mark.asyncio
    async def test_rename_over_column_limit_rejected(self, test_client, alice, auth_headers, resource):
        headers = auth_headers(alice)
        created = await test_client.post(f"/api/{resource}", json={"name": "Short"}, headers=headers)

        response = await test_client.put(
            f"/api/{resource}/{created.json()['id']}", json={"name": "n" * 256}, headers=headers
        )

        assert response.status_code == 400
