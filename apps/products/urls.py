from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'products'

# Router for ViewSets
router = DefaultRouter()
router.register(r'entries', views.ProductEntryViewSet, basename='entry')

urlpatterns = [
    # Catalog
    # GET    /api/products/barcode/{barcode}/   - Look up product
    # POST   /api/products/                     - Upsert product
    # GET    /api/products/{barcode}/images/    - Product gallery, primary first
    # POST   /api/products/{barcode}/images/    - Add a photo to the gallery (multipart)
    path('barcode/<str:barcode>/', views.product_by_barcode, name='product-by-barcode'),
    path('', views.upsert_product_view, name='product-upsert'),
    path('<str:barcode>/images/', views.product_images, name='product-images'),

    # Entry ViewSet routes
    # GET    /api/products/entries/             - List entries (store_id, device_id, status)
    # POST   /api/products/entries/             - Create entry
    # GET    /api/products/entries/{id}/        - Get entry
    # PUT    /api/products/entries/{id}/        - Update entry
    # PATCH  /api/products/entries/{id}/        - Partial update
    # DELETE /api/products/entries/{id}/        - Delete entry
    # GET    /api/products/entries/stats/       - Counts per status
    path('', include(router.urls)),
]
