from .css_classes import CssClassPresenter, has_class, toggle_class

__all__ = ["CssClassPresenter", "has_class", "toggle_class"]
