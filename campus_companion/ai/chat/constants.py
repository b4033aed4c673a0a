from enum import Enum


class ItemKind(str, Enum):
    """Kinds of campus content a suggested link can point at."""

    RESOURCE = "resource"
    EVENT = "event"
    CLUB = "club"


class ResponderType(str, Enum):
    """Available chat responders."""

    AI = "ai"
    KEYWORD = "keyword"


class ChatErrorMessage(str, Enum):
    """Error messages returned to callers on invalid chat requests."""

    MESSAGE_REQUIRED = "Message is required"
    MESSAGE_TOO_LONG = "Message too long (max {max_length} characters)"


APOLOGY_MESSAGE = "I'm having trouble right now. Please try again in a moment!"
KEYWORD_APOLOGY_MESSAGE = "I'm having trouble right now. Please try again!"

APP_LINK_PREFIX = "/app"

NO_DESCRIPTION = "No description"
NO_LOCATION = "TBD"
