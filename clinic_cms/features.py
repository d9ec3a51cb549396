"""
Homepage feature highlights.

Features live in process memory: the site shows at most two, and each
process starts from the same two defaults.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional

MAX_FEATURES = 2

DEFAULT_FEATURES = (
    {
        "featureName": "Innovative Equipment",
        "featureDescription": (
            "We use cutting-edge technology for diagnosis and treatment, "
            "ensuring a high standard of medical care."
        ),
    },
    {
        "featureName": "Personalized Approach",
        "featureDescription": (
            "We Develop Customized Treatment And Care Plans, "
            "Fully Adapted To The Needs Of Each Patient."
        ),
    },
)


class FeatureLimitReached(Exception):
    pass


@dataclass
class FeatureStore:
    items: list[dict] = field(default_factory=list)
    next_id: int = 1
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def __post_init__(self):
        if not self.items:
            self.reset()

    def reset(self) -> None:
        self.items = [
            {"id": index, **feature}
            for index, feature in enumerate(DEFAULT_FEATURES, start=1)
        ]
        self.next_id = len(self.items) + 1

    def all(self) -> list[dict]:
        return [dict(item) for item in self.items]

    def add(self, feature_name: str, feature_description: str) -> dict:
        with self._lock:
            if len(self.items) >= MAX_FEATURES:
                raise FeatureLimitReached()
            feature = {
                "id": self.next_id,
                "featureName": feature_name,
                "featureDescription": feature_description,
            }
            self.next_id += 1
            self.items.append(feature)
            return dict(feature)

    def remove(self, feature_id: int) -> Optional[dict]:
        with self._lock:
            for index, item in enumerate(self.items):
                if item["id"] == feature_id:
                    return self.items.pop(index)
        return None
