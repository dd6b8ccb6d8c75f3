from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'stores'

# Router for ViewSets
router = DefaultRouter()
router.register(r'', views.StoreViewSet, basename='store')

urlpatterns = [
    # Store ViewSet routes (also mounted at /api/teams/)
    # POST   /api/stores/                         - Create store
    # GET    /api/stores/{id}/                    - Get store details
    # DELETE /api/stores/{id}/                    - Delete store (owner)

    # Custom store actions
    # Device listings live under device/{device_id}/; a bare /{value}/ is always a store id
    # POST   /api/stores/join/                    - Join with store code
    # GET    /api/stores/device/{device_id}/      - Stores of a device
    # GET    /api/stores/current/?device_id=      - Device's current store
    # GET    /api/stores/{id}/members/            - List members
    # GET    /api/stores/{id}/entries/            - Store entries
    # DELETE /api/stores/{id}/leave/              - Leave store
    # POST   /api/stores/{id}/regenerate-code/    - New store code (owner)
    # GET    /api/stores/{id}/code-qr/            - Store code as QR image
    path('', include(router.urls)),
]
