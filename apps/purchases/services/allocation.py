"""
Purchase allocation service.

Turns one purchase form submission into one or more Purchase rows.

A submission targets one or more units of a project. Without even
distribution (or with a single target) the whole purchase goes to the
first target unit. With even distribution every target unit gets its
own row carrying an equal share of the quantity and of the cost.

The splitting algorithm ensures no rounding errors:
    1. Convert the amount to integer steps (cents for cost,
       thousandths for quantity)
    2. Calculate the base share per unit (floor division)
    3. Distribute the remainder (1 step each) to the first K units,
       in submitted order
    4. Convert back to Decimal

Example:
    10 items at 25.00 spread over three units::

        purchases = allocate_purchase(
            project=project,
            date=date.today(),
            category='Kitchen',
            description='Cabinet handles',
            quantity=Decimal('10'),
            unit_price=Decimal('25.00'),
            target_units=[apt1.id, apt2.id, apt3.id],
            distribute_evenly=True,
        )
        # total_cost: 83.34, 83.33, 83.33 (sums to 250.00)
        # quantity:   3.334, 3.333, 3.333
"""

import logging
from datetime import date as date_type
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from django.db import transaction

from apps.projects.models import Project, Partner, Unit
from apps.projects.services import get_project_partner, PartnerNotFoundError
from apps.purchases.models import Purchase

from .exceptions import (
    PurchaseValidationError,
    ReferenceNotFoundError,
    InvalidSplitError,
)

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
QUANTITY_STEP = Decimal('0.001')


def compute_total_cost(quantity: Decimal, unit_price: Decimal) -> Decimal:
    """Return quantity x unit_price rounded half-up to cents."""
    return (Decimal(quantity) * Decimal(unit_price)).quantize(CENT, rounding=ROUND_HALF_UP)


def split_evenly(amount: Decimal, parts: int, step: Decimal = CENT) -> List[Decimal]:
    """
    Split amount into equal parts with step precision.

    The first ``remainder`` parts receive one extra step, so the parts
    always sum exactly to the amount.

    Args:
        amount: Amount to split, already expressed in multiples of step.
        parts: Number of parts (at least 1).
        step: Smallest indivisible amount (0.01 for money).

    Returns:
        List of Decimal parts, largest first.

    Raises:
        InvalidSplitError: If parts < 1 or the parts do not sum to amount.

    Example:
        >>> split_evenly(Decimal('100.00'), 3)
        [Decimal('33.34'), Decimal('33.33'), Decimal('33.33')]
    """
    if parts < 1:
        raise InvalidSplitError("At least one part required")

    total_steps = int((amount / step).to_integral_value(rounding=ROUND_HALF_UP))

    base_steps = total_steps // parts
    remainder_steps = total_steps % parts

    shares = []
    for i in range(parts):
        # First 'remainder' parts get +1 step
        part_steps = base_steps + 1 if i < remainder_steps else base_steps
        shares.append((Decimal(part_steps) * step).quantize(step))

    # Verification (safety check)
    if sum(shares) != amount:
        raise InvalidSplitError(
            f"Split calculation error: {sum(shares)} != {amount}"
        )

    return shares


def format_quantity(quantity: Decimal) -> str:
    """Render a quantity without trailing zeros (3.500 -> '3.5')."""
    return f"{Decimal(quantity).normalize():f}"


def to_column_precision(quantity, unit_price):
    """
    Round quantity to thousandths and unit_price to cents.

    These are the stored column precisions, so the stored quantity times
    the stored unit_price always gives the stored total_cost.
    """
    return (
        Decimal(quantity).quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP),
        Decimal(unit_price).quantize(CENT, rounding=ROUND_HALF_UP),
    )


def validate_amounts(quantity: Decimal, unit_price: Decimal) -> None:
    """
    Raises:
        PurchaseValidationError: If quantity <= 0 or unit_price < 0
    """
    if quantity is None or quantity <= 0:
        raise PurchaseValidationError("Quantity must be greater than zero")
    if unit_price is None or unit_price < 0:
        raise PurchaseValidationError("Unit price cannot be negative")


def validate_category(project: Project, category: str) -> None:
    """
    Raises:
        PurchaseValidationError: If category is not one of the project's labels
    """
    if not project.has_category(category):
        raise PurchaseValidationError(f"Unknown category for this project: {category}")


def resolve_partner(project: Project, partner) -> Optional[Partner]:
    """
    Resolve a Partner instance or id within the project.

    Raises:
        ReferenceNotFoundError: If the partner is not part of the project
    """
    if partner is None:
        return None

    if isinstance(partner, Partner):
        if partner.project_id != project.id:
            raise ReferenceNotFoundError("Partner not found in this project")
        return partner

    try:
        return get_project_partner(project=project, partner_id=partner)
    except PartnerNotFoundError as e:
        raise ReferenceNotFoundError(str(e))


def resolve_units(project: Project, target_units: Sequence) -> List[Unit]:
    """
    Resolve Unit instances or ids within the project, keeping submitted order.

    Raises:
        PurchaseValidationError: On an empty list or a repeated unit
        ReferenceNotFoundError: If any unit is not part of the project
    """
    if not target_units:
        raise PurchaseValidationError("At least one target unit is required")

    unit_ids = [getattr(unit, 'id', unit) for unit in target_units]
    if len(set(unit_ids)) != len(unit_ids):
        raise PurchaseValidationError("Target units must not repeat")

    found = {unit.id: unit for unit in project.units.filter(id__in=unit_ids)}

    missing = [unit_id for unit_id in unit_ids if unit_id not in found]
    if missing:
        raise ReferenceNotFoundError("Unit not found in this project")

    return [found[unit_id] for unit_id in unit_ids]


def allocate_purchase(
    *,
    project: Project,
    date: date_type,
    category: str,
    description: str,
    quantity: Decimal,
    unit_price: Decimal,
    target_units: Sequence,
    partner=None,
    distribute_evenly: bool = False,
    receipt_url: str = ''
) -> List[Purchase]:
    """
    Create the Purchase rows for one purchase submission.

    Args:
        project: Project the purchase belongs to.
        target_units: Units (instances or ids) to charge, in order.
        partner: Optional Partner (instance or id) paying for the purchase.
        distribute_evenly: Split quantity and cost across all target units.

    Returns:
        List of created purchases, one per charged unit.

    Raises:
        PurchaseValidationError: If quantity <= 0, unit_price < 0, the
            target list is empty or repeats a unit, the category is not
            in the project, or a unit's share of the quantity would be zero
        ReferenceNotFoundError: If a unit or partner is not in the project

    Note:
        All rows are written in a single transaction. If any insert
        fails, nothing is saved.
    """
    quantity, unit_price = to_column_precision(quantity, unit_price)

    validate_amounts(quantity, unit_price)
    validate_category(project, category)
    units = resolve_units(project, target_units)
    partner = resolve_partner(project, partner)

    total_cost = compute_total_cost(quantity, unit_price)

    if distribute_evenly and len(units) > 1:
        quantity_shares = split_evenly(
            quantity,
            len(units),
            QUANTITY_STEP,
        )
        if quantity_shares[-1] <= 0:
            raise PurchaseValidationError(
                f"Quantity {format_quantity(quantity)} is too small to split across {len(units)} units"
            )
        cost_shares = split_evenly(total_cost, len(units), CENT)

        rows = [
            (unit, share_quantity, share_cost,
             f"{description} ({format_quantity(share_quantity)} units)")
            for unit, share_quantity, share_cost in zip(units, quantity_shares, cost_shares)
        ]
    else:
        rows = [(units[0], quantity, total_cost, description)]

    with transaction.atomic():
        purchases = [
            Purchase.objects.create(
                project=project,
                unit=unit,
                partner=partner,
                date=date,
                category=category,
                description=row_description,
                quantity=row_quantity,
                unit_price=unit_price,
                total_cost=row_cost,
                receipt_url=receipt_url,
            )
            for unit, row_quantity, row_cost, row_description in rows
        ]

    logger.info(
        "Allocated purchase in project %s: %d row(s), total %s",
        project.id, len(purchases), total_cost
    )
    return purchases
