from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


def default_categories():
    """Seed category list for a new project."""
    return list(settings.DEFAULT_PROJECT_CATEGORIES)


class PartnerStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'


class UnitStatus(models.TextChoices):
    PLANNING = 'Planning', 'Planning'
    IN_PROGRESS = 'In Progress', 'In Progress'
    COMPLETED = 'Completed', 'Completed'
    ON_HOLD = 'On Hold', 'On Hold'


class Project(models.Model):
    """Construction or renovation project owned by a single user."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='projects'
    )
    
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    
    total_budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    
    # Distinct category labels purchases are filed under
    categories = models.JSONField(default=default_categories)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'projects'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='projects_owner_created_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return self.name
    
    def has_category(self, category):
        return category in self.categories


class Partner(models.Model):
    """Co-investor contributing funds to a project."""
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='partners'
    )
    
    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=50, blank=True)
    
    total_contribution = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=PartnerStatus.choices,
        default=PartnerStatus.ACTIVE
    )
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'partners'
        indexes = [
            models.Index(fields=['project', 'status'], name='partners_project_status_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.name} ({self.project.name})"


class Unit(models.Model):
    """
    Discrete sub-part of a project (e.g. an apartment) with its own budget.

    Actual cost is never stored; it is rolled up from purchases on demand.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='units'
    )
    
    name = models.CharField(max_length=200)
    type = models.CharField(max_length=100)
    
    budget = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    status = models.CharField(
        max_length=20,
        choices=UnitStatus.choices,
        default=UnitStatus.PLANNING
    )
    completion_date = models.DateField(null=True, blank=True)
    
    # Partner responsible for this unit
    partner = models.ForeignKey(
        Partner,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='units'
    )
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'units'
        indexes = [
            models.Index(fields=['project', 'name'], name='units_project_name_idx'),
            models.Index(fields=['project', 'status'], name='units_project_status_idx'),
        ]
        ordering = ['-created_at']
    
    def __str__(self):
        return f"{self.name} - {self.type}"
