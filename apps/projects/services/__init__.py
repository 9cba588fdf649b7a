"""
Projects app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations run inside transactions.
"""

from .exceptions import (
    ProjectsServiceError,
    ProjectNotFoundError,
    PartnerNotFoundError,
    ProjectValidationError,
)

from .project_management import (
    normalize_categories,
    get_project_for_owner,
    create_project,
    update_project,
    add_category,
    remove_category,
    delete_project,
)

from .partner_management import (
    get_project_partner,
    create_partner,
    create_unit,
    update_unit,
)


__all__ = [
    # Exceptions
    'ProjectsServiceError',
    'ProjectNotFoundError',
    'PartnerNotFoundError',
    'ProjectValidationError',

    # Project Management
    'normalize_categories',
    'get_project_for_owner',
    'create_project',
    'update_project',
    'add_category',
    'remove_category',
    'delete_project',

    # Partners & Units
    'get_project_partner',
    'create_partner',
    'create_unit',
    'update_unit',
]
