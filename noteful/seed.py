"""
Noteful API: Database Seeder
=============================

What:  Wipes the configured database and loads the fixture data from
       noteful.seed_data. Development and demo tooling only.
Usage: python -m noteful.seed

Every table is dropped and recreated, so run this only against a
disposable database. Passwords go through `User.with_password()` like any
other signup.
"""

import asyncio
import logging
import sys
from typing import Dict

from noteful import seed_data
from noteful.config import settings
from noteful.database import Database
from noteful.models import Folder, Note, Tag, User

logger = logging.getLogger(__name__)


async def seed_database(database: Database) -> Dict[str, int]:
    """
    Recreates the schema and inserts all fixtures in one transaction.

    Returns the number of rows inserted per table.
    """
    await database.drop_all()
    await database.create_all()

    users = []
    for fixture in seed_data.USERS:
        user = await asyncio.to_thread(
            User.with_password,
            username=fixture["username"],
            password=seed_data.SEED_PASSWORD,
            fullname=fixture["fullname"],
        )
        user.id = fixture["id"]
        users.append(user)

    # Owners and folders are plain foreign keys (no relationship()), so the
    # unit of work cannot order these inserts: flush each parent level first
    async with database.session() as session:
        session.add_all(users)
        await session.flush()

        session.add_all(Folder(**fixture) for fixture in seed_data.FOLDERS)
        tags = {fixture["id"]: Tag(**fixture) for fixture in seed_data.TAGS}
        session.add_all(tags.values())
        await session.flush()

        for fixture in seed_data.NOTES:
            fields = {key: value for key, value in fixture.items() if key != "tag_ids"}
            session.add(Note(**fields, tags=[tags[tag_id] for tag_id in fixture["tag_ids"]]))

    counts = {
        "users": len(seed_data.USERS),
        "folders": len(seed_data.FOLDERS),
        "tags": len(seed_data.TAGS),
        "notes": len(seed_data.NOTES),
    }
    logger.info("Seeded database: %s", counts)
    return counts


async def main() -> None:
    database = Database.from_settings(settings)
    try:
        await seed_database(database)
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    asyncio.run(main())
