from __future__ import annotations

from typing import Any

from startupcall.domain.startups.services.ordering import expenses_by_category, financial_balance, sum_amounts
from startupcall.workflow.panels.base import Panel

SPONSORSHIPS = "sponsorships"
EXPENSES = "expenses"


class FinancialsPanel(Panel):
    """Sponsorships in, expenses out. Two queries, one balance."""

    tab_id = "financials"
    resource = SPONSORSHIPS
    embedded_key = "sponsorships"

    def sponsorships(self) -> list[dict[str, Any]]:
        return self.items()

    def expenses(self) -> list[dict[str, Any]]:
        return list(self.load(EXPENSES) or [])

    @property
    def can_sponsor(self) -> bool:
        return self.roles.is_sponsor or self.roles.is_admin

    def can_delete_sponsorship(self, sponsorship: dict[str, Any]) -> bool:
        return self.roles.is_admin or (
            self.viewer_id is not None and sponsorship.get("sponsor_actor_id") == self.viewer_id
        )

    def refresh(self) -> None:
        self.cache.invalidate(self.key(SPONSORSHIPS))
        self.cache.invalidate(self.key(EXPENSES))

    def add_sponsorship(self, payload: dict[str, Any]) -> Any:
        if not self.can_sponsor:
            return self._deny()
        return self._mutate("POST", self.path(SPONSORSHIPS), payload, resource=SPONSORSHIPS)

    def delete_sponsorship(self, sponsorship: dict[str, Any]) -> Any:
        if not self.can_delete_sponsorship(sponsorship):
            return self._deny()
        return self._mutate("DELETE", f"{self.path(SPONSORSHIPS)}/{sponsorship['id']}", resource=SPONSORSHIPS)

    def add_expense(self, payload: dict[str, Any]) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("POST", self.path(EXPENSES), payload, resource=EXPENSES)

    def delete_expense(self, expense_id: str) -> Any:
        if not self.roles.can_manage:
            return self._deny()
        return self._mutate("DELETE", f"{self.path(EXPENSES)}/{expense_id}", resource=EXPENSES)

    def render(self) -> dict[str, Any]:
        sponsorships = self.sponsorships()
        expenses = self.expenses()
        manage = self.roles.can_manage
        return {
            "tab": self.tab_id,
            "error": self.error,
            "sponsorships": [{**s, "can_delete": self.can_delete_sponsorship(s)} for s in sponsorships],
            "expenses": [{**e, "can_delete": manage} for e in expenses],
            "total_sponsorships": sum_amounts(sponsorships),
            "total_expenses": sum_amounts(expenses),
            "balance": financial_balance(sponsorships, expenses),
            "expenses_by_category": expenses_by_category(expenses),
            "can_sponsor": self.can_sponsor,
            "can_add_expense": manage,
        }
