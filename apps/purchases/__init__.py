"""
Purchases App - Construction Purchase Records

This app stores purchase records for project units and turns one purchase
form submission into one or more records (even split across units).

Key Features:
- Single-unit and evenly distributed multi-unit purchases
- Cent-precise cost splitting (split totals always match the submission)
- General purchases without a unit
- Total cost recomputed on quantity/price edits

Architecture:
- Models: Purchase
- Services: allocate_purchase, create_general_purchase, update_purchase
- Views: RESTful API with a ViewSet and an allocate action
"""
