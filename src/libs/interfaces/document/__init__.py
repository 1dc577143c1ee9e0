from .document import Document, LoadedPage, Node, Presenter

__all__ = ["Document", "LoadedPage", "Node", "Presenter"]
