from modboard.models.channel import Channel
from modboard.models.message import Message
from modboard.models.panel import Panel
from modboard.models.role import Role, UserRoleAssignment
from modboard.models.ticket import Ticket
from modboard.models.user import User

__all__ = [
    "User",
    "Channel",
    "Message",
    "Panel",
    "Ticket",
    "Role",
    "UserRoleAssignment",
]
