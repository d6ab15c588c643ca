"""
Fixture data loaded by `python -m noteful.seed`.

Ids are fixed so manual API calls during development can be written once.
The id prefix tells the resource type: 3... users, 1... folders, 2... tags,
0... notes. Passwords are plaintext here and hashed at load time.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

# Shared by every seeded user so development logins are easy to remember
SEED_PASSWORD = "password"

USERS = [
    {"id": UUID("33333333-3333-3333-3333-333333333300"), "fullname": "Bob User", "username": "bobuser"},
    {"id": UUID("33333333-3333-3333-3333-333333333301"), "fullname": "Alice User", "username": "aliceuser"},
]

BOB, ALICE = (user["id"] for user in USERS)

FOLDERS = [
    {"id": UUID("11111111-1111-1111-1111-111111111100"), "name": "Archive", "user_id": BOB},
    {"id": UUID("11111111-1111-1111-1111-111111111101"), "name": "Drafts", "user_id": BOB},
    {"id": UUID("11111111-1111-1111-1111-111111111102"), "name": "Personal", "user_id": BOB},
    {"id": UUID("11111111-1111-1111-1111-111111111103"), "name": "Work", "user_id": BOB},
    {"id": UUID("11111111-1111-1111-1111-111111111104"), "name": "Archive", "user_id": ALICE},
    {"id": UUID("11111111-1111-1111-1111-111111111105"), "name": "Drafts", "user_id": ALICE},
]

TAGS = [
    {"id": UUID("22222222-2222-2222-2222-222222222200"), "name": "foo", "user_id": BOB},
    {"id": UUID("22222222-2222-2222-2222-222222222201"), "name": "bar", "user_id": BOB},
    {"id": UUID("22222222-2222-2222-2222-222222222202"), "name": "baz", "user_id": BOB},
    {"id": UUID("22222222-2222-2222-2222-222222222203"), "name": "qux", "user_id": BOB},
    {"id": UUID("22222222-2222-2222-2222-222222222204"), "name": "foo", "user_id": ALICE},
    {"id": UUID("22222222-2222-2222-2222-222222222205"), "name": "bar", "user_id": ALICE},
]

_EPOCH = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _created(minutes: int) -> datetime:
    return _EPOCH + timedelta(minutes=minutes)


NOTES = [
    {
        "id": UUID("00000000-0000-0000-0000-000000000000"),
        "title": "5 life lessons learned from cats",
        "content": "Cats nap whenever they can. Cats ask for what they want.",
        "created_at": _created(0),
        "folder_id": FOLDERS[0]["id"],
        "tag_ids": [TAGS[0]["id"]],
        "user_id": BOB,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000001"),
        "title": "What the government doesn't want you to know about cats",
        "content": "Posuere sollicitudin aliquam ultrices sagittis orci a.",
        "created_at": _created(1),
        "folder_id": FOLDERS[1]["id"],
        "tag_ids": [TAGS[0]["id"], TAGS[1]["id"], TAGS[2]["id"]],
        "user_id": BOB,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000002"),
        "title": "The most boring article about dogs you'll ever read",
        "content": "Dogs fetch. Dogs bark. Dogs sleep.",
        "created_at": _created(2),
        "folder_id": FOLDERS[1]["id"],
        "tag_ids": [TAGS[1]["id"]],
        "user_id": BOB,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000003"),
        "title": "7 things lady gaga has in common with cats",
        "content": "Both love the spotlight and both land on their feet.",
        "created_at": _created(3),
        "folder_id": None,
        "tag_ids": [],
        "user_id": BOB,
    },
    {
        "id": UUID("00000000-0000-0000-0000-000000000004"),
        "title": "Weekly grocery list",
        "content": "Milk, eggs, cat food.",
        "created_at": _created(4),
        "folder_id": FOLDERS[4]["id"],
        "tag_ids": [TAGS[4]["id"]],
        "user_id": ALICE,
    },
]
