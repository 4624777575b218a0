from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    # Sites
    path('sites/', views.sites_collection, name='sites'),
    path('sites/<int:site_pk>/', views.site_detail, name='site_detail'),

    # Labour groups and labour
    path('labour-groups/', views.labour_groups_collection, name='labour_groups'),
    path('labour-groups/<int:group_pk>/', views.labour_group_detail, name='labour_group_detail'),
    path('labour/', views.labour_collection, name='labour'),
    path('labour/<int:labour_pk>/', views.labour_detail, name='labour_detail'),

    # Purchases
    path('purchases/', views.purchases_collection, name='purchases'),
    path('purchases/<int:purchase_pk>/', views.purchase_detail, name='purchase_detail'),
    path('purchases/<int:purchase_pk>/receipt/', views.upload_purchase_receipt, name='upload_purchase_receipt'),

    # Salaries (wage records)
    path('salaries/', views.salaries_collection, name='salaries'),
    path('salaries/summary/', views.salary_summary, name='salary_summary'),
    path('salaries/<int:salary_pk>/', views.salary_detail, name='salary_detail'),

    # Invoices
    path('invoices/', views.invoices_collection, name='invoices'),
    path('invoices/recompute/', views.recompute_invoices, name='recompute_invoices'),
    path('invoices/<int:invoice_pk>/', views.invoice_detail, name='invoice_detail'),

    # Invoice labour details
    path('invoice-labour-details/', views.create_invoice_labour_detail, name='create_invoice_labour_detail'),
    path('invoice-labour-details/item/<int:detail_pk>/', views.invoice_labour_detail_item, name='invoice_labour_detail_item'),
    path('invoice-labour-details/<int:invoice_pk>/', views.invoice_labour_details, name='invoice_labour_details'),

    # Attendance
    path('attendance/', views.attendance_collection, name='attendance'),
    path('attendance/<int:attendance_pk>/', views.attendance_detail, name='attendance_detail'),

    # Notifications
    path('notifications/', views.notifications_collection, name='notifications'),
    path('notifications/read-all/', views.mark_all_notifications_read, name='mark_all_notifications_read'),
    path('notifications/<int:notification_pk>/read/', views.mark_notification_read, name='mark_notification_read'),
    path('notifications/<int:notification_pk>/', views.delete_notification, name='delete_notification'),

    # Auth
    path('auth/me/', views.current_user, name='current_user'),
]
