"""
Purchases app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations run inside transactions.
"""

from .exceptions import (
    PurchaseServiceError,
    PurchaseValidationError,
    ReferenceNotFoundError,
    InvalidSplitError,
)

from .allocation import (
    CENT,
    QUANTITY_STEP,
    compute_total_cost,
    split_evenly,
    allocate_purchase,
)

from .purchase_management import (
    create_general_purchase,
    update_purchase,
    delete_purchase,
)


__all__ = [
    # Exceptions
    'PurchaseServiceError',
    'PurchaseValidationError',
    'ReferenceNotFoundError',
    'InvalidSplitError',

    # Allocation
    'CENT',
    'QUANTITY_STEP',
    'compute_total_cost',
    'split_evenly',
    'allocate_purchase',

    # Purchase Management
    'create_general_purchase',
    'update_purchase',
    'delete_purchase',
]
