from typing import TextIO
import asyncio
import logging
import shlex
import sys

from simple_chat.core.dto import RosterEntryDTO
from simple_chat.services.session import SessionController

from .base import BaseChatView

HELP = """Commands:
  /signup <user> <password>   create an account
  /login <user> <password>    log in
  /users                      reload the list of users
  /chat <id|username>         open a conversation
  /logout                     log out
  /help                       show this help
  /quit                       exit
Any other line is sent to the open conversation."""


class ConsoleView(BaseChatView):
    """
    Terminal rendering of the chat session.

    The controller re-renders the open conversation on every poll tick; the
    terminal only gets a new copy when its text actually changed.
    """
    def __init__(self, stream: TextIO | None = None):
        self.stream = stream or sys.stdout
        self.roster: list[RosterEntryDTO] = []
        self._shown_transcript: tuple[int, list[str]] | None = None

    def show_logged_out(self) -> None:
        self.roster = []
        self._shown_transcript = None
        self._write("Logged out.")

    def show_logged_in(self, username: str) -> None:
        self._shown_transcript = None
        self._write(f"Logged in as {username}.")

    def show_roster(self, entries: list[RosterEntryDTO]) -> None:
        self.roster = list(entries)
        self._write("Registered users:")
        for entry in self.roster:
            self._write(f"  {entry.id}: {entry.username}")

    def show_transcript(self, peer_id: int, lines: list[str]) -> None:
        if self._shown_transcript == (peer_id, lines):
            return
        self._shown_transcript = (peer_id, list(lines))
        self._write(f"--- Chat with {self.name_of(peer_id)} ---")
        for line in lines:
            self._write(line)

    def show_info(self, message: str) -> None:
        self._write(message)

    def show_error(self, message: str) -> None:
        self._write(f"Error: {message}")

    def name_of(self, user_id: int) -> str:
        for entry in self.roster:
            if entry.id == user_id:
                return entry.username
        return f"user:{user_id}"

    def find_user(self, ref: str) -> int | None:
        if ref.isdigit():
            return int(ref)
        for entry in self.roster:
            if entry.username == ref:
                return entry.id
        return None

    def _write(self, text: str):
        print(text, file=self.stream, flush=True)


class ConsoleApp:
    """
    Reads commands from stdin and feeds them to the session controller.
    """
    prompt = "> "

    def __init__(
            self,
            controller: SessionController,
            view: ConsoleView,
            logger: logging.Logger | None = None
    ):
        self.controller = controller
        self.view = view
        self.logger = logger or logging.getLogger(__name__)

    async def run(self):
        self.view.show_info("Welcome to Simple Chat. Type /help for commands.")
        try:
            while True:
                try:
                    line = await asyncio.to_thread(input, self.prompt)
                except EOFError:
                    break
                if not await self.handle_line(line):
                    break
        finally:
            await self.controller.close()

    async def handle_line(self, line: str) -> bool:
        """
        Execute one input line.
        :return: False once the user asked to quit
        """
        if not line.startswith("/"):
            if line.strip():
                await self.controller.send_message(line)
            return True

        try:
            command, *args = shlex.split(line)
        except ValueError as e:
            self.view.show_error(f"Cannot parse command: {e}")
            return True

        if command == "/quit":
            return False
        elif command == "/help":
            self.view.show_info(HELP)
        elif command in ("/login", "/signup"):
            if len(args) != 2:
                self.view.show_error(f"Usage: {command} <user> <password>")
            elif command == "/login":
                await self.controller.login(*args)
            else:
                await self.controller.signup(*args)
        elif command == "/users":
            await self.controller.refresh_roster()
        elif command == "/chat":
            await self._open_chat(args)
        elif command == "/logout":
            self.controller.logout()
        else:
            self.view.show_error(f"Unknown command {command}. Type /help.")
        return True

    async def _open_chat(self, args: list[str]):
        if len(args) != 1:
            self.view.show_error("Usage: /chat <id|username>")
            return
        peer_id = self.view.find_user(args[0])
        if peer_id is None:
            self.view.show_error(f"Unknown user {args[0]}.")
            return
        await self.controller.select_peer(peer_id)
