from django.urls import path
from . import views

app_name = 'daily_checks'

urlpatterns = [
    # POST   /api/daily-checks/sessions/                      - Start daily check
    # GET    /api/daily-checks/sessions/store/{store_id}/     - Store's daily checks
    # GET    /api/daily-checks/sessions/{id}/                 - Session summary
    # GET    /api/daily-checks/sessions/{id}/products/        - Remaining worklist
    # PUT    /api/daily-checks/sessions/{id}/complete/        - Complete
    # POST   /api/daily-checks/actions/                       - Record action
    path('sessions/', views.start_daily_check, name='session-start'),
    path('sessions/store/<uuid:store_id>/', views.store_daily_checks, name='store-sessions'),
    path('sessions/<uuid:session_id>/', views.daily_check_detail, name='session-detail'),
    path('sessions/<uuid:session_id>/products/', views.daily_check_products, name='session-products'),
    path('sessions/<uuid:session_id>/complete/', views.complete_daily_check, name='session-complete'),
    path('actions/', views.record_daily_check_action, name='record-action'),
]
