from __future__ import annotations

from typing import Sequence

from ...libs.interfaces.document import Document
from ...observability.obs import api as obs
from .models import ItemIndex
from .normalize import normalize_text


def build_index(
    document: Document,
    item_selector: str,
    value_selector: str | None = None,
    attribute_names: Sequence[str] | None = None,
) -> ItemIndex:
    """
    Index every item matched by `item_selector`, in document order.

    Values come from the text of sub-elements matched by `value_selector`
    first, then from the named dataset attributes that are present and
    non-empty. Items without any value are indexed too.
    """
    index = ItemIndex()
    names = [n for n in (attribute_names or ()) if n]

    with obs.with_stage("index_build", {"item_selector": item_selector}):
        for item in document.select(item_selector):
            values: list[str] = []
            if value_selector:
                for el in document.select(value_selector, within=item):
                    values.append(normalize_text(document.text(el)))
            for name in names:
                raw = document.data(item, name)
                if raw:
                    values.append(normalize_text(raw))
            index.add(document.node_key(item), item, values)

        obs.event(
            "index.built",
            {
                "entry_count": len(index),
                "empty_entry_count": sum(1 for e in index if not e.values),
            },
        )
    return index
