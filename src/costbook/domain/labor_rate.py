"""Labor rate resolution across a root account's departments.

Rates are immutable records; the most recent one per (root account,
department) is authoritative. A department override only wins when at least
one of its two rates is strictly positive, and then its pair is used as is:
a zero in the other field is NOT filled in from the global rate.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from costbook.database.base import Database
from costbook.domain.entities import Account, LaborRate, RateRecord, RateSource
from costbook.domain.errors import NotFoundError, ValidationError, entity_not_found
from costbook.domain.visibility import VisibilityResolver
from costbook.utils.money import ZERO, to_decimal

logger = logging.getLogger(__name__)


def is_material(record: Optional[RateRecord]) -> bool:
    """True if an override record sets at least one strictly positive rate."""
    if record is None:
        return False
    return record.shop_cost_per_min > 0 or record.external_cost_per_min > 0


def _from_record(record: Optional[RateRecord], source: RateSource) -> LaborRate:
    if record is None:
        return LaborRate(shop=ZERO, external=ZERO, source=source)
    return LaborRate(
        shop=record.shop_cost_per_min,
        external=record.external_cost_per_min,
        source=source,
    )


class LaborRateResolver:
    """Resolve effective per-minute labor rates."""

    def __init__(self, db: Database):
        """Initialize labor rate resolver.

        Args:
            db: Database instance
        """
        self.db = db

    def global_rate(self, root_account_id: int) -> LaborRate:
        """Latest department-less rate of a root account, zero when none exists."""
        record = self.db.get_latest_rate_record(root_account_id, None)
        return _from_record(record, RateSource.GLOBAL)

    def effective_rate(self, root_account_id: int, department_id: Optional[int] = None) -> LaborRate:
        """Return the effective shop/external rate for a department.

        Args:
            root_account_id: Root account owning the rate records
            department_id: Optional department; None returns the global rate

        Returns:
            LaborRate with source OVERRIDE when a material override was used,
            GLOBAL otherwise
        """
        base = self.global_rate(root_account_id)
        if department_id is None:
            return base

        override = self.db.get_latest_rate_record(root_account_id, department_id)
        if not is_material(override):
            logger.debug(
                "No material override for account %s department %s; using global rate",
                root_account_id,
                department_id,
            )
            return base
        return _from_record(override, RateSource.OVERRIDE)

    def rates_by_department(
        self, root_account_id: int, department_ids: Iterable[int]
    ) -> dict[Optional[int], LaborRate]:
        """Effective rates for several departments at once.

        The None key holds the global rate used when no department is chosen.
        """
        base = self.global_rate(root_account_id)
        overrides = self.db.get_latest_department_rate_records(root_account_id)

        rates: dict[Optional[int], LaborRate] = {}
        for department_id in department_ids:
            override = overrides.get(department_id)
            rates[department_id] = (
                _from_record(override, RateSource.OVERRIDE) if is_material(override) else base
            )
        rates[None] = base
        return rates


class LaborRateService:
    """Service for recording and browsing labor rates on behalf of an actor."""

    def __init__(self, db: Database):
        """Initialize labor rate service.

        Args:
            db: Database instance
        """
        self.db = db
        self.visibility = VisibilityResolver(db)
        self.resolver = LaborRateResolver(db)

    def _check_department(self, actor: Account, department_id: Optional[int]) -> None:
        if department_id is None:
            return
        department = self.db.get_department(department_id)
        if department is None:
            raise NotFoundError(entity_not_found("department", department_id))
        # Shared departments (no owner) are usable by everyone
        if department.account_id is not None:
            self.visibility.require_visible(actor, department.account_id, "department", department_id)

    def record_rate(
        self,
        actor: Account,
        shop_cost_per_min: Decimal,
        external_cost_per_min: Decimal,
        department_id: Optional[int] = None,
    ) -> int:
        """Insert a new rate record for the actor's root account.

        Args:
            actor: Acting account
            shop_cost_per_min: Internal (shop) labor cost per minute
            external_cost_per_min: External labor cost per minute
            department_id: Optional department the rate overrides

        Returns:
            Rate record ID

        Raises:
            ValidationError: If a rate is negative
            AuthorizationError: If the department belongs to another tenant
        """
        shop = to_decimal(shop_cost_per_min)
        external = to_decimal(external_cost_per_min)
        if shop < 0 or external < 0:
            raise ValidationError("Labor rates must not be negative")
        self._check_department(actor, department_id)

        root_id = self.visibility.root_id(actor)
        record_id = self.db.create_rate_record(
            account_id=root_id,
            department_id=department_id,
            shop_cost_per_min=shop,
            external_cost_per_min=external,
        )
        logger.info(
            "Recorded rate %s for account %s department %s (shop=%s, external=%s)",
            record_id,
            root_id,
            department_id,
            shop,
            external,
        )
        return record_id

    def effective_rate_for(self, actor: Account, department_id: Optional[int] = None) -> LaborRate:
        """Rate-lookup path: effective rate of the actor's group for a department."""
        self._check_department(actor, department_id)
        return self.resolver.effective_rate(self.visibility.root_id(actor), department_id)

    def department_rates_for(self, actor: Account) -> dict[Optional[int], LaborRate]:
        """Effective rate of every department visible to the actor, plus the global one."""
        departments = self.db.list_departments(self.visibility.visible_accounts(actor))
        return self.resolver.rates_by_department(
            self.visibility.root_id(actor), [d.id for d in departments]
        )

    def rate_history(self, actor: Account, department_id: Optional[int] = None) -> list[RateRecord]:
        """Rate records of the actor's group, newest first.

        With a department only that department's records are listed;
        otherwise every record of the group.
        """
        self._check_department(actor, department_id)
        return self.db.list_rate_records(self.visibility.root_id(actor), department_id)
