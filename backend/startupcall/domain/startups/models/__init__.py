from startupcall.domain.startups.models.comments import Comment
from startupcall.domain.startups.models.documents import Document
from startupcall.domain.startups.models.financials import Expense, Sponsorship
from startupcall.domain.startups.models.milestones import Milestone
from startupcall.domain.startups.models.reviews import Review
from startupcall.domain.startups.models.startups import Startup, StartupStatusHistory
from startupcall.domain.startups.models.tasks import Task
from startupcall.domain.startups.models.team import TeamMember

__all__ = [
    "Comment",
    "Document",
    "Expense",
    "Milestone",
    "Review",
    "Sponsorship",
    "Startup",
    "StartupStatusHistory",
    "Task",
    "TeamMember",
]
