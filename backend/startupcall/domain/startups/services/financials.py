from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from startupcall.core.db.audit import write_audit_event
from startupcall.core.security.auth import Actor
from startupcall.domain.startups.models import Expense, Sponsorship
from startupcall.domain.startups.schemas.financials import ExpenseCreate, SponsorshipCreate
from startupcall.domain.startups.services.access import get_scoped, get_startup, require, roles_for
from startupcall.shared.utils import sa_model_to_dict, utcnow


def _check_read(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> None:
    flags = roles_for(actor, get_startup(db, startup_id))
    require(flags.can_manage or flags.is_sponsor, "You do not have permission to view financials")


def list_sponsorships(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Sponsorship]:
    _check_read(db, startup_id=startup_id, actor=actor)
    stmt = select(Sponsorship).where(Sponsorship.startup_id == startup_id).order_by(Sponsorship.date.desc())
    return list(db.execute(stmt).scalars().all())


def create_sponsorship(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: SponsorshipCreate) -> Sponsorship:
    flags = roles_for(actor, get_startup(db, startup_id))
    require(flags.is_sponsor or flags.is_admin, "Only sponsors can sponsor startups")

    sponsorship = Sponsorship(
        startup_id=startup_id,
        sponsor_actor_id=actor.actor_id,
        amount=payload.amount,
        notes=payload.notes,
        date=payload.date or utcnow().date(),
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(sponsorship)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.sponsorship.create",
        entity_type="sponsorship",
        entity_id=sponsorship.id,
        before=None,
        after=sa_model_to_dict(sponsorship),
    )
    db.commit()
    db.refresh(sponsorship)
    return sponsorship


def delete_sponsorship(db: Session, *, startup_id: uuid.UUID, sponsorship_id: uuid.UUID, actor: Actor) -> None:
    flags = roles_for(actor, get_startup(db, startup_id))
    sponsorship = get_scoped(db, Sponsorship, startup_id=startup_id, entity_id=sponsorship_id, label="Sponsorship")
    require(
        flags.is_admin or sponsorship.sponsor_actor_id == actor.actor_id,
        "You do not have permission to delete this sponsorship",
    )

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.sponsorship.delete",
        entity_type="sponsorship",
        entity_id=sponsorship.id,
        before=sa_model_to_dict(sponsorship),
        after=None,
    )
    db.delete(sponsorship)
    db.commit()


def list_expenses(db: Session, *, startup_id: uuid.UUID, actor: Actor) -> list[Expense]:
    _check_read(db, startup_id=startup_id, actor=actor)
    stmt = select(Expense).where(Expense.startup_id == startup_id).order_by(Expense.date.desc())
    return list(db.execute(stmt).scalars().all())


def create_expense(db: Session, *, startup_id: uuid.UUID, actor: Actor, payload: ExpenseCreate) -> Expense:
    require(roles_for(actor, get_startup(db, startup_id)).can_manage, "Only the founder or an admin can add expenses")

    expense = Expense(
        startup_id=startup_id,
        amount=payload.amount,
        category=payload.category,
        description=payload.description,
        date=payload.date or utcnow().date(),
        created_by=actor.actor_id,
        updated_by=actor.actor_id,
    )
    db.add(expense)
    db.flush()

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.expense.create",
        entity_type="expense",
        entity_id=expense.id,
        before=None,
        after=sa_model_to_dict(expense),
    )
    db.commit()
    db.refresh(expense)
    return expense


def delete_expense(db: Session, *, startup_id: uuid.UUID, expense_id: uuid.UUID, actor: Actor) -> None:
    require(roles_for(actor, get_startup(db, startup_id)).can_manage, "Only the founder or an admin can delete expenses")
    expense = get_scoped(db, Expense, startup_id=startup_id, entity_id=expense_id, label="Expense")

    write_audit_event(
        db,
        startup_id=startup_id,
        actor_id=actor.actor_id,
        action="startups.expense.delete",
        entity_type="expense",
        entity_id=expense.id,
        before=sa_model_to_dict(expense),
        after=None,
    )
    db.delete(expense)
    db.commit()
