"""Search-box boundary: event set, component wiring, console driver."""

from .events import EventDispatcher, SearchEvent
from .search_box import SearchComponent, filter_config_from_box

__all__ = ["EventDispatcher", "SearchEvent", "SearchComponent", "filter_config_from_box"]
