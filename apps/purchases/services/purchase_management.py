"""Single purchase create, edit and delete."""

import logging
from datetime import date as date_type
from decimal import Decimal

from django.db import transaction

from apps.projects.models import Project
from apps.purchases.models import Purchase

from .allocation import (
    compute_total_cost,
    to_column_precision,
    validate_amounts,
    validate_category,
    resolve_partner,
    resolve_units,
)
from .exceptions import PurchaseValidationError

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = {
    'unit',
    'partner',
    'date',
    'category',
    'description',
    'quantity',
    'unit_price',
    'receipt_url',
}


@transaction.atomic
def create_general_purchase(
    *,
    project: Project,
    date: date_type,
    category: str,
    description: str,
    quantity: Decimal,
    unit_price: Decimal,
    partner=None,
    receipt_url: str = ''
) -> Purchase:
    """
    Create a purchase that is not charged to any unit.

    General purchases count toward category spending and project totals
    but not toward any unit's actual cost.

    Raises:
        PurchaseValidationError: If quantity <= 0, unit_price < 0 or the
            category is not in the project
        ReferenceNotFoundError: If the partner is not in the project
    """
    quantity, unit_price = to_column_precision(quantity, unit_price)

    validate_amounts(quantity, unit_price)
    validate_category(project, category)
    partner = resolve_partner(project, partner)

    purchase = Purchase.objects.create(
        project=project,
        unit=None,
        partner=partner,
        date=date,
        category=category,
        description=description,
        quantity=quantity,
        unit_price=unit_price,
        total_cost=compute_total_cost(quantity, unit_price),
        receipt_url=receipt_url,
    )

    logger.info("Created general purchase %s in project %s", purchase.id, project.id)
    return purchase


@transaction.atomic
def update_purchase(*, purchase: Purchase, **changes) -> Purchase:
    """
    Apply field changes to a purchase.

    total_cost is derived: it is recomputed whenever quantity or
    unit_price changes and cannot be set directly.

    Raises:
        PurchaseValidationError: On an unknown or derived field, invalid
            amounts or a category not in the project
        ReferenceNotFoundError: If a new unit or partner is not in the project
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise PurchaseValidationError(
            f"Cannot update field(s): {', '.join(sorted(unknown))}"
        )

    project = purchase.project

    # Existing rows keep a category later removed from the project
    if 'category' in changes and changes['category'] != purchase.category:
        validate_category(project, changes['category'])

    if 'unit' in changes and changes['unit'] is not None:
        changes['unit'] = resolve_units(project, [changes['unit']])[0]

    if 'partner' in changes:
        changes['partner'] = resolve_partner(project, changes['partner'])

    for field, value in changes.items():
        setattr(purchase, field, value)

    if 'quantity' in changes or 'unit_price' in changes:
        purchase.quantity, purchase.unit_price = to_column_precision(
            purchase.quantity, purchase.unit_price
        )
        validate_amounts(purchase.quantity, purchase.unit_price)
        purchase.total_cost = compute_total_cost(purchase.quantity, purchase.unit_price)

    purchase.save()
    return purchase


def delete_purchase(*, purchase: Purchase) -> None:
    """Delete a single purchase row."""
    purchase_id = purchase.id
    purchase.delete()
    logger.info("Deleted purchase %s", purchase_id)
