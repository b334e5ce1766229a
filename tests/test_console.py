import io

import pytest
import pytest_asyncio

from simple_chat.core.dto import RosterEntryDTO
from simple_chat.services.session import SessionController, SessionState
from simple_chat.ui.console import ConsoleApp, ConsoleView

from .conftest import BOB


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest_asyncio.fixture
async def app(directory, conversations, output):
    view = ConsoleView(stream=output)
    controller = SessionController(directory, conversations, view, poll_interval=60)
    console = ConsoleApp(controller, view)
    yield console
    await controller.close()


async def test_login_prints_roster(app, output):
    assert await app.handle_line("/login alice alicepass")

    text = output.getvalue()
    assert "Logged in as alice." in text
    assert "  2: bob" in text
    assert "  3: carol" in text


async def test_chat_by_username_and_send(app, output):
    await app.handle_line("/login alice alicepass")
    await app.handle_line("/chat bob")

    assert app.controller.context.peer_id == BOB
    assert "--- Chat with bob ---" in output.getvalue()
    assert "You: Hi Bob! This is Alice." in output.getvalue()

    await app.handle_line("see you soon")
    assert output.getvalue().rstrip().endswith("You: see you soon")


async def test_chat_by_id(app):
    await app.handle_line("/login alice alicepass")
    await app.handle_line("/chat 3")

    assert app.controller.state is SessionState.CHATTING
    assert app.controller.context.peer_id == 3


async def test_chat_with_unknown_user(app, output):
    await app.handle_line("/login alice alicepass")
    await app.handle_line("/chat nobody")

    assert "Error: Unknown user nobody." in output.getvalue()
    assert app.controller.state is SessionState.LOGGED_IN


async def test_signup_with_quoted_password(app, output):
    await app.handle_line('/signup dave "two words"')
    await app.handle_line('/login dave "two words"')

    assert "Account created. You can now login." in output.getvalue()
    assert app.controller.context.username == "dave"


async def test_errors_are_printed(app, output):
    await app.handle_line("/login alice nope")
    await app.handle_line("/login alice")
    await app.handle_line("/frobnicate")
    await app.handle_line("hello?")

    text = output.getvalue()
    assert "Error: Invalid credentials." in text
    assert "Error: Usage: /login <user> <password>" in text
    assert "Error: Unknown command /frobnicate. Type /help." in text
    assert "Error: Login first." in text


async def test_logout_and_quit(app, output):
    await app.handle_line("/login alice alicepass")
    assert await app.handle_line("/logout")
    assert "Logged out." in output.getvalue()

    assert await app.handle_line("/quit") is False


async def test_blank_line_is_ignored(app, output):
    await app.handle_line("   ")
    assert output.getvalue() == ""


def test_view_skips_unchanged_transcript(output):
    view = ConsoleView(stream=output)
    view.show_roster([RosterEntryDTO(id=2, username="bob")])

    view.show_transcript(2, ["[t] bob: hi"])
    view.show_transcript(2, ["[t] bob: hi"])
    view.show_transcript(2, ["[t] bob: hi", "[t] You: yo"])

    assert output.getvalue().count("--- Chat with bob ---") == 2


def test_view_find_user(output):
    view = ConsoleView(stream=output)
    view.show_roster([RosterEntryDTO(id=2, username="bob")])

    assert view.find_user("bob") == 2
    assert view.find_user("17") == 17
    assert view.find_user("carol") is None
    assert view.name_of(5) == "user:5"
