class ChatError(Exception):
    """
    Base class for every failure the chat client reports to the user.
    The string form of an instance is the user-facing message.
    """
    default_message = "Unexpected error."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class DuplicateUsername(ChatError):
    default_message = "Username already exists."

    def __init__(self, username: str, message: str | None = None):
        super().__init__(message)
        self.username = username


class AuthFailure(ChatError):
    """
    Raised for an unknown username and for a wrong password alike,
    so callers cannot tell the two apart.
    """
    default_message = "Invalid credentials."


class StoreUnavailable(ChatError):
    default_message = "Chat storage is unavailable."


class ValidationError(ChatError):
    default_message = "Invalid input."
