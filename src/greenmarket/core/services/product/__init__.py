from .product_service import SqlProductService

__all__ = ["SqlProductService"]
