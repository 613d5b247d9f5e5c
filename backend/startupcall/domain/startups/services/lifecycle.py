from __future__ import annotations

from startupcall.shared.enums import Role, StartupStatus
from startupcall.shared.exceptions import InvalidTransition, NotAuthorized


# Forward edges only. REJECTED and COMPLETED are terminal.
TRANSITIONS: dict[StartupStatus, frozenset[StartupStatus]] = {
    StartupStatus.DRAFT: frozenset({StartupStatus.SUBMITTED}),
    StartupStatus.SUBMITTED: frozenset({StartupStatus.UNDER_REVIEW}),
    StartupStatus.UNDER_REVIEW: frozenset({StartupStatus.ACCEPTED, StartupStatus.REJECTED}),
    StartupStatus.ACCEPTED: frozenset({StartupStatus.COMPLETED}),
    StartupStatus.REJECTED: frozenset(),
    StartupStatus.COMPLETED: frozenset(),
}

# Who may drive an edge by hand. ADMIN may drive every edge.
FOUNDER_EDGES: frozenset[tuple[StartupStatus, StartupStatus]] = frozenset(
    {(StartupStatus.DRAFT, StartupStatus.SUBMITTED)}
)

# Statuses in which reviewers may still submit a review.
REVIEWABLE: frozenset[StartupStatus] = frozenset({StartupStatus.SUBMITTED, StartupStatus.UNDER_REVIEW})


def allowed_targets(current: StartupStatus | str) -> frozenset[StartupStatus]:
    return TRANSITIONS[StartupStatus(current)]


def is_terminal(status: StartupStatus | str) -> bool:
    return not TRANSITIONS[StartupStatus(status)]


def check_transition(current: StartupStatus | str, target: StartupStatus | str) -> StartupStatus:
    """Return the target status if the edge is allowed, else raise InvalidTransition."""
    src = StartupStatus(current)
    dst = StartupStatus(target)
    if dst not in TRANSITIONS[src]:
        allowed = sorted(s.value for s in TRANSITIONS[src])
        raise InvalidTransition(f"Cannot move startup from {src.value} to {dst.value}. Allowed: {allowed}")
    return dst


def check_transition_actor(
    current: StartupStatus | str,
    target: StartupStatus | str,
    *,
    roles: tuple[Role, ...],
    is_founder: bool,
) -> StartupStatus:
    dst = check_transition(current, target)
    if Role.ADMIN in roles:
        return dst
    if is_founder and (StartupStatus(current), dst) in FOUNDER_EDGES:
        return dst
    raise NotAuthorized("You do not have permission to change the status of this startup")
