from django.db import models
from django.conf import settings

# ============================================================================
# SITE MODELS
# ============================================================================

# SERVICE: sites
class Sites(models.Model):
    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('on_hold', 'On Hold'),
        ('on_progress', 'On Progress'),
    ]
    site_pk = models.AutoField(primary_key=True)
    site_name = models.CharField(max_length=255)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='sites'
    )
    location = models.TextField(null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    budget = models.DecimalField(max_digits=15, decimal_places=2, null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='on_progress')
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'sites'
        verbose_name = 'Site'
        verbose_name_plural = 'Sites'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return self.site_name

# ============================================================================
# LABOUR MODELS
# ============================================================================

# SERVICE: labour
class LabourGroups(models.Model):
    group_pk = models.AutoField(primary_key=True)
    group_name = models.CharField(max_length=200)
    description = models.TextField(null=True, blank=True)
    site = models.ForeignKey(Sites, on_delete=models.SET_NULL, null=True, blank=True, related_name='labour_groups')
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'labour_groups'
        verbose_name = 'Labour Group'
        verbose_name_plural = 'Labour Groups'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return self.group_name

# SERVICE: labour
class Labour(models.Model):
    LABOUR_TYPE_CHOICES = [
        ('office_staff', 'Office Staff'),
        ('hire_worker', 'Hire Worker'),
        ('subcontractor_labour', 'Subcontractor Labour'),
    ]
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]
    labour_pk = models.AutoField(primary_key=True)
    site = models.ForeignKey(Sites, on_delete=models.SET_NULL, null=True, blank=True, related_name='labour')
    labour_group = models.ForeignKey(
        LabourGroups, on_delete=models.SET_NULL, null=True, blank=True, related_name='members'
    )
    full_name = models.CharField(max_length=200)
    labour_type = models.CharField(max_length=30, choices=LABOUR_TYPE_CHOICES)
    contact_number = models.CharField(max_length=20, null=True, blank=True)
    address = models.TextField(null=True, blank=True)
    daily_wage = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    monthly_salary = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    join_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active')
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'labour'
        verbose_name = 'Labour'
        verbose_name_plural = 'Labour'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return self.full_name

# SERVICE: attendance
class Attendance(models.Model):
    STATUS_CHOICES = [
        ('present', 'Present'),
        ('absent', 'Absent'),
        ('half_day', 'Half Day'),
    ]
    attendance_pk = models.AutoField(primary_key=True)
    site = models.ForeignKey(Sites, on_delete=models.CASCADE, null=True, blank=True, related_name='attendance')
    labour = models.ForeignKey(Labour, on_delete=models.CASCADE, null=True, blank=True, related_name='attendance')
    date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='present')
    hours_worked = models.DecimalField(max_digits=4, decimal_places=2, null=True, blank=True)
    remarks = models.TextField(null=True, blank=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'attendance'
        ordering = ['-date', '-created_at']

# ============================================================================
# PURCHASE MODELS
# ============================================================================

# SERVICE: purchases
class Purchases(models.Model):
    purchase_pk = models.AutoField(primary_key=True)
    site = models.ForeignKey(Sites, on_delete=models.SET_NULL, null=True, blank=True, related_name='purchases')
    purchase_date = models.DateField(null=True, blank=True)
    total_amount = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    invoice_number_or_img = models.CharField(max_length=50, null=True, blank=True)
    receipt = models.FileField(upload_to='purchase_receipts/', null=True, blank=True)
    item_description = models.TextField(null=True, blank=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'purchases'
        verbose_name = 'Purchase'
        verbose_name_plural = 'Purchases'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return f"Purchase {self.purchase_pk} - {self.total_amount}"

# SERVICE: purchases
class PurchaseProducts(models.Model):
    product_pk = models.AutoField(primary_key=True)
    purchase = models.ForeignKey(Purchases, on_delete=models.CASCADE, related_name='products')
    name = models.CharField(max_length=255, null=True, blank=True)
    quantity = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    units = models.CharField(max_length=50, null=True, blank=True)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    single_total = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'purchase_products'
        ordering = ['product_pk']

# ============================================================================
# PAYROLL MODELS
# ============================================================================

# SERVICE: salaries
class Salaries(models.Model):
    PAYMENT_TYPE_CHOICES = [
        ('daily', 'Daily Wage'),
        ('piecework', 'Piecework'),
        ('advance', 'Advance Payment'),
        ('refund', 'Refund'),
        ('monthly', 'Monthly Salary'),
        ('pending', 'Pending'),
    ]
    salary_pk = models.AutoField(primary_key=True)
    site = models.ForeignKey(Sites, on_delete=models.SET_NULL, null=True, blank=True, related_name='salaries')
    labour = models.ForeignKey(Labour, on_delete=models.SET_NULL, null=True, blank=True, related_name='salaries')
    payment_date = models.DateField(null=True, blank=True)
    payment_type = models.CharField(max_length=50, choices=PAYMENT_TYPE_CHOICES, default='daily')
    payment_amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    # One line of the wage record, summed by core.services.totals
    piecework_payment = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    daily_wage = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    advance_payment = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    refund = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    remarks = models.TextField(null=True, blank=True)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'salary'
        verbose_name = 'Salary'
        verbose_name_plural = 'Salaries'
        ordering = ['-created_at', '-pk']

# SERVICE: invoices
class Invoices(models.Model):
    PAYMENT_STATUS_CHOICES = [
        ('paid', 'Paid'),
        ('credit', 'Credit'),
    ]
    invoice_pk = models.AutoField(primary_key=True)
    site = models.ForeignKey(Sites, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    invoice_number = models.CharField(max_length=50, unique=True)
    invoice_date = models.DateField(null=True, blank=True)
    # Stored for reporting; always rewritten from labour details on save
    total_piecework = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    total_daily_wage = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    total_advance_payment = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    total_refund = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    grand_total = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    payment_status = models.CharField(max_length=10, choices=PAYMENT_STATUS_CHOICES, default='credit')
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'invoices'
        verbose_name = 'Invoice'
        verbose_name_plural = 'Invoices'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return self.invoice_number

# SERVICE: invoices
class InvoiceLabourDetail(models.Model):
    detail_pk = models.AutoField(primary_key=True)
    invoice = models.ForeignKey(Invoices, on_delete=models.CASCADE, related_name='labour_details')
    labour = models.ForeignKey(
        Labour, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoice_labour_details'
    )
    labour_group = models.ForeignKey(
        LabourGroups, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoice_labour_details'
    )
    piecework_payment = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    daily_wage = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    advance_payment = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    refund = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    sign = models.CharField(max_length=255, null=True, blank=True)

    class Meta:
        db_table = 'invoice_labour_detail'
        ordering = ['detail_pk']

# ============================================================================
# NOTIFICATIONS
# ============================================================================

# SERVICE: notifications
class Notifications(models.Model):
    TYPE_CHOICES = [
        ('info', 'Info'),
        ('warning', 'Warning'),
        ('error', 'Error'),
        ('success', 'Success'),
    ]
    STATUS_CHOICES = [
        ('unread', 'Unread'),
        ('read', 'Read'),
    ]
    notification_pk = models.AutoField(primary_key=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, null=True, blank=True, related_name='notifications'
    )
    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='info')
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='unread')
    related_entity_type = models.CharField(max_length=50, null=True, blank=True)
    related_entity_id = models.IntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, null=True)
    updated_at = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at', '-pk']

    def __str__(self):
        return self.title
