import pytest
import pytest_asyncio
from sqlalchemy import select, func

from simple_chat.config import Config, DBConfig, PollingConfig
from simple_chat.core.database import Message
from simple_chat.core.db_manager import DatabaseManager
from simple_chat.core.dto import RosterEntryDTO
from simple_chat.core.gateways import UserGateway, MessageGateway
from simple_chat.core.password_hash import PasswordHash
from simple_chat.core.seed import bootstrap
from simple_chat.services.conversation_store import ConversationStore
from simple_chat.services.session import SessionController
from simple_chat.services.user_directory import UserDirectory
from simple_chat.ui.base import BaseChatView

ALICE, BOB, CAROL = 1, 2, 3


class RecordingView(BaseChatView):
    """Keeps every render call so tests can assert on what the user saw."""

    def __init__(self):
        self.events = []
        self.roster = []
        self.transcripts = []
        self.infos = []
        self.errors = []

    def show_logged_out(self):
        self.events.append(("logged_out",))

    def show_logged_in(self, username):
        self.events.append(("logged_in", username))

    def show_roster(self, entries: list[RosterEntryDTO]):
        self.roster = list(entries)
        self.events.append(("roster", [e.username for e in entries]))

    def show_transcript(self, peer_id, lines):
        self.transcripts.append((peer_id, list(lines)))
        self.events.append(("transcript", peer_id))

    def show_info(self, message):
        self.infos.append(message)

    def show_error(self, message):
        self.errors.append(message)

    @property
    def last_transcript(self):
        return self.transcripts[-1] if self.transcripts else None


@pytest.fixture
def config(tmp_path) -> Config:
    return Config(
        db=DBConfig(path=str(tmp_path / "chat.db")),
        polling=PollingConfig(interval=0.05),
    )


@pytest.fixture
def password_hash() -> PasswordHash:
    return PasswordHash()


@pytest_asyncio.fixture
async def db_manager(config, password_hash):
    manager = DatabaseManager(config)
    await bootstrap(manager, password_hash)
    yield manager
    await manager.close()


@pytest.fixture
def user_gateway(db_manager) -> UserGateway:
    return UserGateway(db_manager)


@pytest.fixture
def message_gateway(db_manager) -> MessageGateway:
    return MessageGateway(db_manager)


@pytest.fixture
def directory(user_gateway, password_hash) -> UserDirectory:
    return UserDirectory(user_gateway, password_hash)


@pytest.fixture
def conversations(message_gateway) -> ConversationStore:
    return ConversationStore(message_gateway)


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest_asyncio.fixture
async def controller(directory, conversations, view, config):
    session = SessionController(
        user_directory=directory,
        conversation_store=conversations,
        view=view,
        poll_interval=config.polling.interval,
    )
    yield session
    await session.close()


@pytest.fixture
def count_messages(db_manager):
    async def _count() -> int:
        async with db_manager.session() as session:
            result = await session.execute(select(func.count()).select_from(Message))
            return result.scalar_one()
    return _count
