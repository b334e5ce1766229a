from dataclasses import dataclass, replace
from enum import Enum
import asyncio
import logging

from simple_chat.core.dto import MessageDTO
from simple_chat.core.exceptions import ChatError
from simple_chat.ui.base import BaseChatView

from .conversation_store import ConversationStore
from .models import parse_message
from .poller import Poller
from .user_directory import UserDirectory


class SessionState(str, Enum):
    LOGGED_OUT = "logged_out"
    LOGGED_IN = "logged_in"  # no peer selected
    CHATTING = "chatting"


@dataclass(frozen=True)
class SessionContext:
    user_id: int
    username: str
    peer_id: int | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.LOGGED_IN if self.peer_id is None else SessionState.CHATTING


def format_message(message: MessageDTO, who: str) -> str:
    return f"[{message.created_at}] {who}: {message.content}"


class SessionController:
    """
    Drives one user's session: login, roster, peer selection, sending and the
    periodic transcript refresh.

    The session lives in a single immutable SessionContext that is swapped on
    every transition and dropped on logout, so nothing about a previous login
    leaks into the next one. Failures are logged and shown through the view;
    no ChatError escapes a public method.

    Attributes:
        user_directory: Account lookups and credential checks
        conversation_store: Message persistence
        view: Render target
        poller: Refresh clock, running while logged in
    """
    def __init__(
            self,
            user_directory: UserDirectory,
            conversation_store: ConversationStore,
            view: BaseChatView,
            poll_interval: float = 2.0,
            logger: logging.Logger | None = None
    ):
        self.user_directory = user_directory
        self.conversation_store = conversation_store
        self.view = view
        self.logger = logger or logging.getLogger(__name__)
        self.poller = Poller(self.poll_tick, poll_interval, self.logger)

        self._context: SessionContext | None = None
        self._render_lock = asyncio.Lock()

    @property
    def context(self) -> SessionContext | None:
        return self._context

    @property
    def state(self) -> SessionState:
        return self._context.state if self._context else SessionState.LOGGED_OUT

    async def signup(self, username: str, password: str) -> int | None:
        try:
            user_id = await self.user_directory.register(username, password)
        except ChatError as e:
            self._report(e)
            return None
        self.view.show_info("Account created. You can now login.")
        return user_id

    async def login(self, username: str, password: str) -> bool:
        """
        Start a session. Loads the roster and starts the refresh clock.
        A login on top of an existing session replaces it, peer included.
        """
        try:
            user_id = await self.user_directory.authenticate(username, password)
        except ChatError as e:
            self._report(e)
            return False

        self._context = SessionContext(user_id=user_id, username=username.strip())
        self.logger.info("User %s (id=%d) logged in", self._context.username, user_id)
        self.view.show_logged_in(self._context.username)
        await self.refresh_roster()
        self.poller.start()
        return True

    def logout(self):
        """
        End the session. The clock is stopped before the context is cleared.
        """
        if self._context is None:
            return
        self.poller.stop()
        self.logger.info("User %s logged out", self._context.username)
        self._context = None
        self.view.show_logged_out()

    async def refresh_roster(self) -> bool:
        ctx = self._context
        if ctx is None:
            self.view.show_error("Login first.")
            return False
        try:
            entries = await self.user_directory.list_others(ctx.user_id)
        except ChatError as e:
            self._report(e)
            return False
        if self._context is ctx:
            self.view.show_roster(entries)
        return True

    async def select_peer(self, peer_id: int) -> bool:
        """
        Open the conversation with peer_id, discarding the one on screen.
        """
        if self._context is None:
            self.view.show_error("Login first.")
            return False
        self._context = replace(self._context, peer_id=peer_id)
        await self.refresh_transcript()
        return True

    async def send_message(self, text: str) -> bool:
        ctx = self._context
        if ctx is None:
            self.view.show_error("Login first.")
            return False
        if ctx.peer_id is None:
            self.view.show_error("Select a user to chat with.")
            return False
        try:
            request = parse_message(text)
            await self.conversation_store.send(ctx.user_id, ctx.peer_id, request.content)
        except ChatError as e:
            self._report(e)
            return False
        await self.refresh_transcript()
        return True

    async def poll_tick(self):
        await self.refresh_transcript()

    async def refresh_transcript(self):
        """
        Re-query the open conversation and hand it to the view whole.
        Does nothing without an open conversation. The result is dropped if
        the session changed while the query ran.
        """
        async with self._render_lock:
            ctx = self._context
            if ctx is None or ctx.peer_id is None:
                return
            try:
                messages = await self.conversation_store.transcript(ctx.user_id, ctx.peer_id)
                lines = await self._format_transcript(ctx, messages)
            except ChatError as e:
                self._report(e)
                return
            if self._context is not ctx:
                self.logger.debug("Session changed during refresh, dropping transcript")
                return
            self.view.show_transcript(ctx.peer_id, lines)

    async def close(self):
        self.logout()
        await self.poller.aclose()

    async def _format_transcript(self, ctx: SessionContext, messages: list[MessageDTO]) -> list[str]:
        names = {ctx.user_id: "You"}
        lines = []
        for message in messages:
            if message.from_user not in names:
                names[message.from_user] = await self.user_directory.username_of(message.from_user)
            lines.append(format_message(message, names[message.from_user]))
        return lines

    def _report(self, error: ChatError):
        self.logger.warning("%s: %s", type(error).__name__, error)
        self.view.show_error(str(error))
