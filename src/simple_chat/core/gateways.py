from sqlalchemy import select, insert, func, or_, and_
from sqlalchemy.exc import IntegrityError
import logging

from .database import User, Message
from .interfaces import UserInterface, MessageInterface
from .dto import UserDTO, RosterEntryDTO, MessageDTO
from .exceptions import DuplicateUsername
from .db_manager import DatabaseManager

class UserGateway(UserInterface):
    __slots__ = ("_db_manager", "_logger")

    def __init__(self, db_manager: DatabaseManager, logger: logging.Logger | None = None):
        self._db_manager = db_manager
        self._logger = logger or logging.getLogger(__name__)

    async def create_user(self, username: str, password_hash: str) -> UserDTO:
        async with self._db_manager.session() as session:
            try:
                stmt = insert(User).values(
                    username=username,
                    password_hash=password_hash
                ).returning(User)
                result = await session.execute(stmt)
                user = result.scalars().first()
                return UserDTO(
                    id=user.id,
                    username=user.username,
                    password_hash=user.password_hash
                )
            except IntegrityError as e:
                if "UNIQUE" not in str(e.orig).upper():
                    self._logger.error("Error creating user in database: %s", e)
                    raise
                self._logger.info("Username %r is already taken", username)
                raise DuplicateUsername(username) from e
            except Exception as e:
                self._logger.error("Error creating user in database: %s", e)
                raise

    async def get_user_by_id(self, user_id: int) -> UserDTO | None:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User).where(User.id == user_id)
                result = await session.execute(stmt)
                user = result.scalars().first()
                if user:
                    return UserDTO(
                        id=user.id,
                        username=user.username,
                        password_hash=user.password_hash
                    )
                else:
                    return None
            except Exception as e:
                self._logger.error("Error getting user by id in database: %s", e)
                raise

    async def get_user_by_name(self, username: str) -> UserDTO | None:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User).where(User.username == username)
                result = await session.execute(stmt)
                user = result.scalars().first()
                if user:
                    return UserDTO(
                        id=user.id,
                        username=user.username,
                        password_hash=user.password_hash
                    )
                else:
                    return None
            except Exception as e:
                self._logger.error("Error getting user by name in database: %s", e)
                raise

    async def get_users_except(self, user_id: int) -> list[RosterEntryDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(User.id, User.username).where(
                    User.id != user_id
                ).order_by(User.username.asc())
                result = await session.execute(stmt)

                return [
                    RosterEntryDTO(
                        id=row.id,
                        username=row.username
                    ) for row in result.all()
                ]
            except Exception as e:
                self._logger.error("Error getting roster in database: %s", e)
                raise

    async def count_users(self) -> int:
        async with self._db_manager.session() as session:
            try:
                result = await session.execute(select(func.count()).select_from(User))
                return result.scalar_one()
            except Exception as e:
                self._logger.error("Error counting users in database: %s", e)
                raise

class MessageGateway(MessageInterface):
    __slots__ = ("_db_manager", "_logger")

    def __init__(self, db_manager: DatabaseManager, logger: logging.Logger | None = None):
        self._db_manager = db_manager
        self._logger = logger or logging.getLogger(__name__)

    async def create_message(self, from_user: int, to_user: int, content: str) -> MessageDTO:
        async with self._db_manager.session() as session:
            try:
                stmt = insert(Message).values(
                    from_user=from_user,
                    to_user=to_user,
                    content=content
                ).returning(Message)
                result = await session.execute(stmt)
                msg = result.scalars().first()

                return MessageDTO(
                    id=msg.id,
                    from_user=msg.from_user,
                    to_user=msg.to_user,
                    content=msg.content,
                    created_at=msg.created_at
                )

            except Exception as e:
                self._logger.error("Error creating message in database: %s", e)
                raise

    async def get_conversation_history(self, user1_id: int, user2_id: int) -> list[MessageDTO]:
        async with self._db_manager.session() as session:
            try:
                stmt = select(Message).where(
                    or_(
                        and_(
                            Message.from_user == user1_id,
                            Message.to_user == user2_id
                        ),
                        and_(
                            Message.from_user == user2_id,
                            Message.to_user == user1_id
                        )
                    )
                ).order_by(Message.id.asc())
                result = await session.execute(stmt)
                messages = result.scalars().all()

                return [
                    MessageDTO(
                        id=m.id,
                        from_user=m.from_user,
                        to_user=m.to_user,
                        content=m.content,
                        created_at=m.created_at
                    ) for m in messages
                ]

            except Exception as e:
                self._logger.error("Error getting conversation history in database: %s", e)
                raise
