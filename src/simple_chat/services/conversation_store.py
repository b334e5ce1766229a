import logging

from simple_chat.core.dto import MessageDTO
from simple_chat.core.gateways import MessageGateway


class ConversationStore:
    """
    One-to-one message persistence.

    Content is checked by the caller before send(); the store writes whatever
    it is given and stamps it with the database clock.
    """
    def __init__(self, message_gateway: MessageGateway, logger: logging.Logger | None = None):
        self.message_gateway = message_gateway
        self.logger = logger or logging.getLogger(__name__)

    async def send(self, from_id: int, to_id: int, content: str) -> None:
        message = await self.message_gateway.create_message(
            from_user=from_id,
            to_user=to_id,
            content=content
        )
        self.logger.debug("Stored message %d from %d to %d", message.id, from_id, to_id)

    async def transcript(self, user_a: int, user_b: int) -> list[MessageDTO]:
        """
        Every message between the two users in either direction, oldest first.
        Argument order does not matter.
        """
        return await self.message_gateway.get_conversation_history(user_a, user_b)
