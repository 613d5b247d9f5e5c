from startupcall.workflow.panels.base import Panel
from startupcall.workflow.panels.discussion import DiscussionPanel
from startupcall.workflow.panels.documents import DocumentsPanel
from startupcall.workflow.panels.financials import FinancialsPanel
from startupcall.workflow.panels.milestones import MilestonesPanel
from startupcall.workflow.panels.overview import OverviewPanel
from startupcall.workflow.panels.reviews import ReviewsPanel
from startupcall.workflow.panels.tasks import TasksPanel
from startupcall.workflow.panels.team import TeamPanel

__all__ = [
    "DiscussionPanel",
    "DocumentsPanel",
    "FinancialsPanel",
    "MilestonesPanel",
    "OverviewPanel",
    "Panel",
    "ReviewsPanel",
    "TasksPanel",
    "TeamPanel",
]
