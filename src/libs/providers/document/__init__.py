from .soup_document import SoupDocument, SoupPageLoader, dataset_attr

__all__ = ["SoupDocument", "SoupPageLoader", "dataset_attr"]
