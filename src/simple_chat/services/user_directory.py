import logging

from simple_chat.core.dto import RosterEntryDTO
from simple_chat.core.exceptions import AuthFailure, StoreUnavailable
from simple_chat.core.gateways import UserGateway
from simple_chat.core.password_hash import PasswordHash

from .models import parse_credentials


class UserDirectory:
    """
    Registration, login checks and user lookups.

    Attributes:
        user_gateway: User persistence interface
        password_hash: Digest function shared by register and authenticate
        logger: Logger instance for tracking operations
    """
    def __init__(
            self,
            user_gateway: UserGateway,
            password_hash: PasswordHash,
            logger: logging.Logger | None = None
    ):
        self.user_gateway = user_gateway
        self.password_hash = password_hash
        self.logger = logger or logging.getLogger(__name__)

    async def register(self, username: str, password: str) -> int:
        """
        Create an account.
        Args:
            username: Desired username, surrounding whitespace ignored
            password: Plaintext password, only its digest is stored
        Returns: int: ID assigned to the new user
        Raises:
            ValidationError: username or password is empty
            DuplicateUsername: username is taken
        """
        credentials = parse_credentials(username, password)
        user = await self.user_gateway.create_user(
            username=credentials.username,
            password_hash=self.password_hash.hash(credentials.password)
        )
        self.logger.info("Registered user %s (id=%d)", user.username, user.id)
        return user.id

    async def authenticate(self, username: str, password: str) -> int:
        """
        Check credentials.
        Returns: int: ID of the matching user
        Raises:
            ValidationError: username or password is empty
            AuthFailure: unknown username or wrong password
        """
        credentials = parse_credentials(username, password)
        user = await self.user_gateway.get_user_by_name(credentials.username)
        if user is None or user.password_hash != self.password_hash.hash(credentials.password):
            self.logger.info("Failed login for %r", credentials.username)
            raise AuthFailure()
        return user.id

    async def list_others(self, excluding_id: int) -> list[RosterEntryDTO]:
        return await self.user_gateway.get_users_except(excluding_id)

    async def username_of(self, user_id: int) -> str:
        """
        Display name for a user id, or "user:<id>" if it cannot be resolved.
        Never raises, transcript rendering depends on it.
        """
        try:
            user = await self.user_gateway.get_user_by_id(user_id)
        except StoreUnavailable as e:
            self.logger.warning("Could not resolve user %d: %s", user_id, e)
            user = None
        return user.username if user else f"user:{user_id}"
