from enum import Enum


class TicketStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"
    DELETED = "DELETED"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TicketSortBy(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    MESSAGES = "messages"


class MessageViewMode(str, Enum):
    SEARCH = "search"
    TRANSCRIPT = "transcript"
