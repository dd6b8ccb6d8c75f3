from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'batches'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.BatchScanViewSet, basename='batch')

urlpatterns = [
    # Batch ViewSet routes
    # POST   /api/batch-scans/                      - Start batch scan
    # GET    /api/batch-scans/{id}/                 - Get batch scan
    # DELETE /api/batch-scans/{id}/                 - Delete batch scan

    # Custom batch actions
    # Device listings live under device/{device_id}/; a bare /{value}/ is always a batch id
    # GET    /api/batch-scans/device/{device_id}/   - Device's batch scans
    # GET    /api/batch-scans/{id}/items/           - List staged items
    # POST   /api/batch-scans/{id}/items/           - Stage item
    # POST   /api/batch-scans/{id}/complete/        - Create entries, close batch
    path('', include(router.urls)),
]
