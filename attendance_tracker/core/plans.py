"""
Subscription plan catalog

Plan key -> display name, seat cap, Stripe price id. Built once from settings
and shared through the get_plan_catalog dependency.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional

from attendance_tracker.core.config import Settings, get_settings

CATALOG_VERSION = 1
DEFAULT_PLAN_KEY = "tier1"


@dataclass(frozen=True)
class Plan:
    key: str
    name: str
    max_employees: int
    price_id: Optional[str] = None


class PlanCatalog:
    """Immutable lookup of plans by key and by external price id"""

    def __init__(self, plans: List[Plan], default_key: str = DEFAULT_PLAN_KEY, version: int = CATALOG_VERSION):
        self._by_key: Dict[str, Plan] = {plan.key: plan for plan in plans}
        if default_key not in self._by_key:
            raise ValueError(f"Default plan {default_key!r} missing from catalog")
        self._by_price: Dict[str, Plan] = {
            plan.price_id: plan for plan in plans if plan.price_id
        }
        self.default_key = default_key
        self.version = version

    @property
    def default(self) -> Plan:
        return self._by_key[self.default_key]

    def get(self, key: str) -> Optional[Plan]:
        return self._by_key.get(key)

    def by_price(self, price_id: Optional[str]) -> Optional[Plan]:
        if not price_id:
            return None
        return self._by_price.get(price_id)

    def __iter__(self):
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)


def build_plan_catalog(settings: Settings) -> PlanCatalog:
    return PlanCatalog([
        Plan(key="tier1", name="Starter", max_employees=5),
        Plan(key="tier2", name="Growth", max_employees=10, price_id=settings.STRIPE_PRICE_TIER2),
        Plan(key="tier3", name="Business", max_employees=50, price_id=settings.STRIPE_PRICE_TIER3),
    ])


@lru_cache()
def get_plan_catalog() -> PlanCatalog:
    """Get cached plan catalog"""
    return build_plan_catalog(get_settings())
