"""
Core views package.

This package contains the JSON API view functions for the core app.
All views are re-exported here so urls.py can reference them directly.
"""

# Site views
from .sites import sites_collection, site_detail

# Labour views
from .labour import (
    labour_groups_collection, labour_group_detail, labour_collection, labour_detail
)

# Purchase views
from .purchases import purchases_collection, purchase_detail, upload_purchase_receipt

# Salary views
from .salaries import salaries_collection, salary_detail, salary_summary

# Invoice views
from .invoices import (
    invoices_collection, invoice_detail, recompute_invoices,
    invoice_labour_details, create_invoice_labour_detail, invoice_labour_detail_item
)

# Attendance views
from .attendance import attendance_collection, attendance_detail

# Notification views
from .notifications import (
    notifications_collection, mark_notification_read, mark_all_notifications_read,
    delete_notification
)

# Auth views
from .auth import current_user
