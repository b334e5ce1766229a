from abc import ABC, abstractmethod

from simple_chat.core.dto import RosterEntryDTO


class BaseChatView(ABC):
    """
    Render target of the session controller.
    Every call replaces what was shown before, nothing is patched in place.
    """
    @abstractmethod
    def show_logged_out(self) -> None:
        raise NotImplementedError()

    @abstractmethod
    def show_logged_in(self, username: str) -> None:
        raise NotImplementedError()

    @abstractmethod
    def show_roster(self, entries: list[RosterEntryDTO]) -> None:
        """
        Replace the list of users that can be chatted with.
        :param entries: sorted by username
        """
        raise NotImplementedError()

    @abstractmethod
    def show_transcript(self, peer_id: int, lines: list[str]) -> None:
        """
        Replace the open conversation.
        :param peer_id:
        :param lines: one formatted line per message, oldest first
        """
        raise NotImplementedError()

    @abstractmethod
    def show_info(self, message: str) -> None:
        raise NotImplementedError()

    @abstractmethod
    def show_error(self, message: str) -> None:
        raise NotImplementedError()
