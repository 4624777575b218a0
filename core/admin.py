from django.contrib import admin
from django import forms
from .models import (
    Sites, LabourGroups, Labour, Attendance, Purchases, PurchaseProducts, Salaries,
    Invoices, InvoiceLabourDetail, Notifications
)
from .services.invoices import sync_invoice_totals
from .services.purchases import sync_purchase_total

# Helper function to set nullable fields as not required
def set_nullable_fields_not_required(form, nullable_fields):
    for field_name in nullable_fields:
        if field_name in form.fields:
            form.fields[field_name].required = False

# Custom forms for models with `null=True` fields
class SitesForm(forms.ModelForm):
    class Meta:
        model = Sites
        fields = '__all__'
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        set_nullable_fields_not_required(self, ['owner', 'location', 'budget'])

class LabourForm(forms.ModelForm):
    class Meta:
        model = Labour
        fields = '__all__'
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        set_nullable_fields_not_required(self, ['site', 'labour_group', 'contact_number', 'address'])

class SalariesForm(forms.ModelForm):
    class Meta:
        model = Salaries
        fields = '__all__'
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        set_nullable_fields_not_required(self, ['site', 'labour', 'remarks'])

class InvoicesForm(forms.ModelForm):
    class Meta:
        model = Invoices
        # Totals are derived from the labour details
        exclude = ('total_piecework', 'total_daily_wage', 'total_advance_payment', 'total_refund', 'grand_total')
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        set_nullable_fields_not_required(self, ['site', 'recorded_by', 'invoice_date'])

# Inlines
class PurchaseProductsInline(admin.TabularInline):
    model = PurchaseProducts
    extra = 0
    readonly_fields = ('single_total',)

class InvoiceLabourDetailInline(admin.TabularInline):
    model = InvoiceLabourDetail
    extra = 0

# Custom admin classes
class SitesAdmin(admin.ModelAdmin):
    form = SitesForm
    list_display = ("site_pk", "site_name", "location", "status", "start_date", "end_date", "budget")
    list_filter = ('status',)
    search_fields = ('site_name', 'location')

class LabourGroupsAdmin(admin.ModelAdmin):
    list_display = ("group_pk", "group_name", "site")

class LabourAdmin(admin.ModelAdmin):
    form = LabourForm
    list_display = ("labour_pk", "full_name", "labour_type", "site", "labour_group", "daily_wage", "status")
    list_filter = ('labour_type', 'status', 'site')
    search_fields = ('full_name', 'contact_number')

class AttendanceAdmin(admin.ModelAdmin):
    list_display = ("attendance_pk", "date", "labour", "site", "status", "hours_worked")
    list_filter = ('status', 'site')
    date_hierarchy = 'date'

class PurchasesAdmin(admin.ModelAdmin):
    list_display = ("purchase_pk", "site", "purchase_date", "invoice_number_or_img", "total_amount", "receipt")
    list_filter = ('site',)
    inlines = [PurchaseProductsInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        sync_purchase_total(form.instance)

class SalariesAdmin(admin.ModelAdmin):
    form = SalariesForm
    list_display = ("salary_pk", "labour", "site", "payment_date", "payment_type", "payment_amount",
                    "piecework_payment", "daily_wage", "advance_payment", "refund")
    list_filter = ('payment_type', 'site')

class InvoicesAdmin(admin.ModelAdmin):
    form = InvoicesForm
    list_display = (
        "invoice_pk", "invoice_number", "site", "invoice_date", "total_piecework", "total_daily_wage",
        "total_advance_payment", "total_refund", "grand_total", "payment_status"
    )
    list_filter = ('payment_status', 'site')
    search_fields = ('invoice_number',)
    readonly_fields = ('total_piecework', 'total_daily_wage', 'total_advance_payment', 'total_refund', 'grand_total')
    inlines = [InvoiceLabourDetailInline]

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        sync_invoice_totals(form.instance)

class NotificationsAdmin(admin.ModelAdmin):
    list_display = ("notification_pk", "user", "title", "type", "status", "created_at")
    list_filter = ('type', 'status')

# Register models with custom admin classes
admin.site.register(Sites, SitesAdmin)
admin.site.register(LabourGroups, LabourGroupsAdmin)
admin.site.register(Labour, LabourAdmin)
admin.site.register(Attendance, AttendanceAdmin)
admin.site.register(Purchases, PurchasesAdmin)
admin.site.register(Salaries, SalariesAdmin)
admin.site.register(Invoices, InvoicesAdmin)
admin.site.register(Notifications, NotificationsAdmin)
