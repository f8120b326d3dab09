from complaints.models.assignment import TicketAssignment
from complaints.models.comment import Comment
from complaints.models.department import Department
from complaints.models.refresh_token import RefreshToken
from complaints.models.role import ROLE_PREFIX, Role
from complaints.models.ticket import TICKET_STATUSES, Ticket
from complaints.models.user import User

__all__ = [
    "Comment",
    "Department",
    "RefreshToken",
    "ROLE_PREFIX",
    "Role",
    "TICKET_STATUSES",
    "Ticket",
    "TicketAssignment",
    "User",
]
