from abc import ABC, abstractmethod

from .dto import UserDTO, RosterEntryDTO, MessageDTO

class UserInterface(ABC):
    @abstractmethod
    async def create_user(
            self,
            username: str,
            password_hash: str
    ) -> UserDTO:
        """
        Creates a new user in the database.
        :param username:
        :param password_hash:
        :return:
        :raises DuplicateUsername: the UNIQUE constraint rejected the insert
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_user_by_id(
            self,
            user_id: int
    ) -> UserDTO | None:
        """
        Get user by User.id
        :param user_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_user_by_name(
            self,
            username: str
    ) -> UserDTO | None:
        """
        Get user by exact User.username
        :param username:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_users_except(
            self,
            user_id: int
    ) -> list[RosterEntryDTO]:
        """
        Get every user but one, ordered by username
        :param user_id:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def count_users(self) -> int:
        raise NotImplementedError()


class MessageInterface(ABC):
    @abstractmethod
    async def create_message(
            self,
            from_user: int,
            to_user: int,
            content: str
    ) -> MessageDTO:
        """
        Creates a new message in the database.
        :param from_user:
        :param to_user:
        :param content:
        :return:
        """
        raise NotImplementedError()

    @abstractmethod
    async def get_conversation_history(
            self,
            user1_id: int,
            user2_id: int
    ) -> list[MessageDTO]:
        """
        Gets the conversation between two users in both directions, oldest first.
        :param user1_id:
        :param user2_id:
        :return:
        """
        raise NotImplementedError()
