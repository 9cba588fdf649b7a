from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


class Purchase(models.Model):
    """
    One purchase line of a project.

    A purchase may be assigned to a unit, or left unassigned as a
    general project purchase. total_cost is quantity x unit_price
    rounded to cents and is maintained by the service layer.
    """
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    
    project = models.ForeignKey(
        'projects.Project',
        on_delete=models.CASCADE,
        related_name='purchases'
    )
    unit = models.ForeignKey(
        'projects.Unit',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )
    partner = models.ForeignKey(
        'projects.Partner',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='purchases'
    )
    
    date = models.DateField()
    category = models.CharField(max_length=100)
    description = models.CharField(max_length=500)
    
    # Financial details
    quantity = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))]
    )
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    total_cost = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    
    receipt_url = models.URLField(max_length=500, blank=True)
    
    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    
    class Meta:
        db_table = 'purchases'
        indexes = [
            models.Index(fields=['project', 'date'], name='purchases_project_date_idx'),
            models.Index(fields=['project', 'category'], name='purchases_project_cat_idx'),
            models.Index(fields=['unit'], name='purchases_unit_idx'),
        ]
        ordering = ['-date', '-created_at']
    
    def __str__(self):
        return f"{self.description} ({self.total_cost})"
    
    @property
    def is_general(self):
        """True when the purchase is not assigned to any unit."""
        return self.unit_id is None
