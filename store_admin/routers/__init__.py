from . import stores, billboards, categories, products

__all__ = ["stores", "billboards", "categories", "products"]
