"""Convenience accessors for record classes that own an image collection."""

from image_collection.core.utils.constants import VARIANT_ORIGINAL, VARIANT_THUMBNAIL
from image_collection.services.collection_manager import CollectionManager


class ImageCollectionMixin:
    """Mix into an ImageRecord subclass to expose its images directly.

    Example:
        class Product(ImageCollectionMixin, MappingRecord):
            pass

        Product({"slug": "red-chair", "image_count": 2}).thumbnail_url(1)
    """

    def image_collection(self, identifier_attribute: str | None = None) -> CollectionManager:
        identifier = None
        if identifier_attribute is not None:
            identifier = self.read_attribute(identifier_attribute)
        return CollectionManager(self, identifier)

    def image_url(self, variant: str = VARIANT_ORIGINAL, index: int = 0) -> str:
        return self.image_collection().url(variant, index)

    def thumbnail_url(self, index: int = 0) -> str:
        return self.image_url(VARIANT_THUMBNAIL, index)

    def original_url(self, index: int = 0) -> str:
        return self.image_url(VARIANT_ORIGINAL, index)

    def image_urls(self, variant: str = VARIANT_ORIGINAL) -> list[str]:
        return self.image_collection().urls(variant)

    def image_count(self) -> int:
        return self.image_collection().count()

    def has_images(self) -> bool:
        return self.image_count() > 0
