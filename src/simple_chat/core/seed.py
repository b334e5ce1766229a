from sqlalchemy import select, insert, func
import logging

from .database import User, Message
from .db_manager import DatabaseManager
from .password_hash import PasswordHash

DEMO_USERS = (
    ("alice", "alicepass"),
    ("bob", "bobpass"),
    ("carol", "carolpass"),
)

# (sender, recipient, content), in insertion order
DEMO_MESSAGES = (
    ("alice", "bob", "Hi Bob! This is Alice."),
    ("bob", "alice", "Hey Alice, nice to meet you."),
)


async def seed_if_empty(
        db_manager: DatabaseManager,
        password_hash: PasswordHash,
        logger: logging.Logger | None = None
) -> bool:
    """
    Inserts the demo accounts and messages when the users table is empty.
    Runs in a single session, so a failure leaves the database unseeded.
    :return: True if demo data was written
    """
    logger = logger or logging.getLogger(__name__)

    async with db_manager.session() as session:
        result = await session.execute(select(func.count()).select_from(User))
        if result.scalar_one() > 0:
            logger.debug("Users present, skipping demo data")
            return False

        ids = {}
        for username, password in DEMO_USERS:
            result = await session.execute(
                insert(User).values(
                    username=username,
                    password_hash=password_hash.hash(password)
                ).returning(User.id)
            )
            ids[username] = result.scalar_one()

        for sender, recipient, content in DEMO_MESSAGES:
            await session.execute(
                insert(Message).values(
                    from_user=ids[sender],
                    to_user=ids[recipient],
                    content=content
                )
            )

    logger.info("Seeded %d demo users and %d demo messages", len(DEMO_USERS), len(DEMO_MESSAGES))
    return True


async def bootstrap(
        db_manager: DatabaseManager,
        password_hash: PasswordHash,
        logger: logging.Logger | None = None
):
    """
    Opens the database, creates missing tables and seeds demo data.
    :raises StoreUnavailable: the database cannot be opened
    """
    await db_manager.initialize()
    await db_manager.create_tables()
    await seed_if_empty(db_manager, password_hash, logger)
