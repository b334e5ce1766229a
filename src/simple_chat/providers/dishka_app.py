from typing import AsyncIterable
from dishka import Provider, Scope, provide
import logging

from simple_chat.config import Config, load_config
from simple_chat.core.db_manager import DatabaseManager
from simple_chat.core.exceptions import StoreUnavailable
from simple_chat.core.gateways import UserGateway, MessageGateway
from simple_chat.core.password_hash import PasswordHash
from simple_chat.core.seed import bootstrap
from simple_chat.services.conversation_store import ConversationStore
from simple_chat.services.session import SessionController
from simple_chat.services.user_directory import UserDirectory
from simple_chat.ui.console import ConsoleApp, ConsoleView

class AdaptersProvider(Provider):
    def __init__(self, env_path: str | None = ".env"):
        super().__init__()
        self.env_path = env_path

    @provide(scope=Scope.APP)
    def get_config(self) -> Config:
        return load_config(self.env_path)

    @provide(scope=Scope.APP)
    def get_logger(self) -> logging.Logger:
        return logging.getLogger("simple_chat")

    @provide(scope=Scope.APP)
    async def get_db_manager(
            self,
            config: Config,
            password_hash: PasswordHash,
            logger: logging.Logger
    ) -> AsyncIterable[DatabaseManager]:
        db_manager = DatabaseManager(config, logger)
        try:
            await bootstrap(db_manager, password_hash, logger)
        except StoreUnavailable:
            await db_manager.close()
            raise
        yield db_manager
        await db_manager.close()

class GatewaysProvider(Provider):
    @provide(scope=Scope.APP)
    def get_user_gateway(
            self,
            db_manager: DatabaseManager,
            logger: logging.Logger
    ) -> UserGateway:
        return UserGateway(db_manager, logger)

    @provide(scope=Scope.APP)
    def get_message_gateway(
            self,
            db_manager: DatabaseManager,
            logger: logging.Logger
    ) -> MessageGateway:
        return MessageGateway(db_manager, logger)

class ServicesProvider(Provider):
    @provide(scope=Scope.APP)
    def get_password_hash(self) -> PasswordHash:
        return PasswordHash()

    @provide(scope=Scope.APP)
    def get_user_directory(
            self,
            user_gateway: UserGateway,
            password_hash: PasswordHash,
            logger: logging.Logger
    ) -> UserDirectory:
        return UserDirectory(
            user_gateway=user_gateway,
            password_hash=password_hash,
            logger=logger
        )

    @provide(scope=Scope.APP)
    def get_conversation_store(
            self,
            message_gateway: MessageGateway,
            logger: logging.Logger
    ) -> ConversationStore:
        return ConversationStore(
            message_gateway=message_gateway,
            logger=logger
        )

class UIProvider(Provider):
    @provide(scope=Scope.APP)
    def get_view(self) -> ConsoleView:
        return ConsoleView()

    @provide(scope=Scope.APP)
    async def get_session_controller(
            self,
            config: Config,
            user_directory: UserDirectory,
            conversation_store: ConversationStore,
            view: ConsoleView,
            logger: logging.Logger
    ) -> AsyncIterable[SessionController]:
        controller = SessionController(
            user_directory=user_directory,
            conversation_store=conversation_store,
            view=view,
            poll_interval=config.polling.interval,
            logger=logger
        )
        yield controller
        await controller.close()

    @provide(scope=Scope.APP)
    def get_console_app(
            self,
            controller: SessionController,
            view: ConsoleView,
            logger: logging.Logger
    ) -> ConsoleApp:
        return ConsoleApp(
            controller=controller,
            view=view,
            logger=logger
        )
