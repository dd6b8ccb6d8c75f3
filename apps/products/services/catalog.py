"""
Product catalog service.

Products are keyed by barcode and shared by every store. Writes merge:
a value that is already known is never replaced by a missing one.

A product's primary image is the first image URL the catalog learns
about, whether it comes from an upsert, an entry or a gallery upload.
Later images never replace it.
"""

import logging
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from apps.products.models import Product, ProductImage

from .exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)


def _is_supplied(value) -> bool:
    return value is not None and value != ''


def _claim_primary_image(product: Product, image_url: Optional[str]) -> bool:
    """
    Make ``image_url`` the product's primary image if it has none yet.

    The caller must hold a row lock on the product and save it.

    Returns:
        True if the image became primary
    """
    if not _is_supplied(image_url) or product.image_url:
        return False

    product.image_url = image_url
    return True


@transaction.atomic
def upsert_product(
    *,
    barcode: str,
    name: Optional[str] = None,
    category: Optional[str] = None,
    image_url: Optional[str] = None
) -> Product:
    """
    Create or update the catalog record for a barcode.

    Only supplied fields are written; absent (None or empty) values never
    overwrite what is stored. ``image_url`` only fills a missing primary
    image. Barcodes are opaque strings, no checksum validation is done.

    Args:
        barcode: Raw barcode from the scanner
        name: Display name (optional)
        category: Category (optional)
        image_url: Candidate primary image URL (optional)

    Returns:
        The resulting Product
    """
    fields = {
        'name': name,
        'category': category,
    }
    supplied = {key: value for key, value in fields.items() if _is_supplied(value)}

    product, created = (
        Product.objects
        .select_for_update()
        .get_or_create(barcode=barcode, defaults=supplied)
    )

    if created:
        if _claim_primary_image(product, image_url):
            product.save(update_fields=['image_url'])
        logger.info("Product %s created", barcode)
        return product

    for key, value in supplied.items():
        setattr(product, key, value)

    update_fields = list(supplied.keys())
    if _claim_primary_image(product, image_url):
        update_fields.append('image_url')
    product.save(update_fields=[*update_fields, 'updated_at'])

    return product


def get_product_by_barcode(*, barcode: str) -> Product:
    """
    Fetch a product by barcode.

    Raises:
        ProductNotFoundError: If the barcode is unknown
    """
    try:
        return Product.objects.get(barcode=barcode)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product with barcode {barcode} not found")


@transaction.atomic
def add_product_image(
    *,
    barcode: str,
    image_url: str,
    store=None,
    member=None
) -> ProductImage:
    """
    Add an uploaded photo to a product's gallery.

    The image becomes primary when the product has no primary image yet.

    Args:
        barcode: Barcode of an existing product
        image_url: Public URL of the stored file
        store: Store the upload came from (optional)
        member: StoreMember who uploaded it (optional)

    Returns:
        Created ProductImage

    Raises:
        ProductNotFoundError: If the barcode is unknown
    """
    try:
        product = Product.objects.select_for_update().get(barcode=barcode)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product with barcode {barcode} not found")

    is_primary = _claim_primary_image(product, image_url)
    if is_primary:
        product.save(update_fields=['image_url', 'updated_at'])

    image = ProductImage.objects.create(
        product=product,
        image_url=image_url,
        uploaded_by_store=store,
        uploaded_by_member=member,
        is_primary=is_primary,
    )

    logger.info("Image %s added to product %s (primary=%s)", image.id, barcode, is_primary)
    return image


def list_product_images(*, barcode: str) -> QuerySet[ProductImage]:
    """
    Gallery of a product, primary image first, then oldest first.

    Raises:
        ProductNotFoundError: If the barcode is unknown
    """
    product = get_product_by_barcode(barcode=barcode)

    return (
        ProductImage.objects
        .filter(product=product)
        .select_related('product')
        .order_by('-is_primary', 'created_at')
    )
