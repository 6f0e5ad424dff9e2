"""
Helpers for reading and building the HAL+JSON payloads exchanged with Dwolla.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

__all__ = [
    "Link",
    "compact",
    "embedded",
    "link_href",
    "links_payload",
    "parse_links",
]


@dataclass(frozen=True)
class Link:
    href: str
    type: Optional[str] = None
    resource_type: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Link":
        return cls(
            href=payload.get("href", ""),
            type=payload.get("type"),
            resource_type=payload.get("resource-type"),
        )

    def to_payload(self) -> Dict[str, str]:
        return compact(
            {"href": self.href, "type": self.type, "resource-type": self.resource_type}
        )


def parse_links(payload: Mapping[str, Any]) -> Dict[str, Link]:
    """Read the ``_links`` object of a vendor representation."""
    raw = payload.get("_links") or {}
    return {
        name: Link.from_payload(value)
        for name, value in raw.items()
        if isinstance(value, Mapping)
    }


def links_payload(links: Mapping[str, Link]) -> Dict[str, Dict[str, str]]:
    return {name: link.to_payload() for name, link in links.items()}


def link_href(links: Mapping[str, Link], name: str) -> Optional[str]:
    link = links.get(name)
    if link is None or not link.href:
        return None
    return link.href


def embedded(payload: Mapping[str, Any], collection: str) -> List[Mapping[str, Any]]:
    """
    Return the items listed under ``_embedded[collection]``.

    A missing envelope or key yields an empty list.
    """
    items = (payload.get("_embedded") or {}).get(collection) or []
    return [item for item in items if isinstance(item, Mapping)]


def compact(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None``, empty strings and empty containers from ``values``."""
    return {
        key: value
        for key, value in values.items()
        if value is not None and value != "" and value != {} and value != []
    }
