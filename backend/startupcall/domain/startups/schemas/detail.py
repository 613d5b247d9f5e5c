from __future__ import annotations

from pydantic import Field

from startupcall.domain.startups.schemas.comments import CommentOut
from startupcall.domain.startups.schemas.financials import SponsorshipOut
from startupcall.domain.startups.schemas.milestones import MilestoneOut
from startupcall.domain.startups.schemas.reviews import ReviewOut
from startupcall.domain.startups.schemas.startups import StartupOut
from startupcall.domain.startups.schemas.team import TeamMemberOut


class StartupDetailOut(StartupOut):
    """Startup with the collections panels may use as initial data."""

    reviews: list[ReviewOut] = Field(default_factory=list)
    milestones: list[MilestoneOut] = Field(default_factory=list)
    sponsorships: list[SponsorshipOut] = Field(default_factory=list)
    team_members: list[TeamMemberOut] = Field(default_factory=list)
    comments: list[CommentOut] = Field(default_factory=list)
