"""Fixed sample mapping and documents for demos and tests."""

from __future__ import annotations

import datetime as dt

SAMPLE_MAPPING: dict[str, object] = {
    "properties": {
        "user": {
            "properties": {
                "name": {"type": "text"},
                "address": {
                    "type": "nested",
                    "properties": {
                        "street": {"type": "text"},
                        "city": {"type": "text"},
                        "zipcode": {"type": "integer"},
                    },
                },
                "tags": {"type": "keyword"},
                "scores": {"type": "float"},
            },
            "type": "nested",
        },
        "timestamp": {"type": "date"},
    }
}


def sample_documents(now: dt.datetime | None = None) -> list[dict[str, object]]:
    """Return three user documents; the third carries a bare string tag.

    Returns
    -------
    list[dict[str, object]]
        Sample documents with timestamps one day apart, newest first.
    """
    current = now or dt.datetime.now(dt.UTC)
    return [
        {
            "user": {
                "name": "John Doe",
                "address": {"street": "123 Main St", "city": "New York", "zipcode": 10001},
                "tags": ["developer", "golang"],
                "scores": [85.5, 92.0, 78.5],
            },
            "timestamp": current,
        },
        {
            "user": {
                "name": "Jane Smith",
                "address": {"street": "456 Elm St", "city": "Los Angeles", "zipcode": 90001},
                "tags": ["designer", "ui/ux"],
                "scores": [88.0, 95.5],
            },
            "timestamp": current - dt.timedelta(days=1),
        },
        {
            "user": {
                "name": "Bob Johnson",
                "address": {"street": "789 Oak St", "city": "Chicago", "zipcode": 60601},
                "tags": "manager",
                "scores": [79.0, 82.5, 91.0, 87.5],
            },
            "timestamp": current - dt.timedelta(days=2),
        },
    ]


__all__ = ["SAMPLE_MAPPING", "sample_documents"]
