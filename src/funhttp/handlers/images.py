"""
Random image endpoint (/json) and the catalog it draws from.
"""

import random
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from ..http.response import HTTPResponse, ResponseBuilder


DEFAULT_IMAGES: Tuple[Tuple[str, str], ...] = (
    ("streets", "https://iili.io/JV1pSV.jpg"),
    ("bread", "https://iili.io/Jj9MWG.jpg"),
)


@dataclass(frozen=True)
class ImageCatalog:
    """
    Read-only, ordered set of (header, image URL) pairs.

    Built once at startup and handed to the handler that needs it.
    """

    entries: Tuple[Tuple[str, str], ...] = DEFAULT_IMAGES

    def __post_init__(self):
        if not self.entries:
            raise ValueError("ImageCatalog needs at least one image")

    @classmethod
    def from_mapping(cls, images: Mapping[str, str]) -> "ImageCatalog":
        return cls(entries=tuple(images.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def pick(self, rng: random.Random) -> Tuple[str, str]:
        """Choose an entry uniformly at random."""
        return self.entries[rng.randrange(len(self.entries))]


class RandomImageHandler:
    """
    Returns one catalog entry as {"header": ..., "image": ...}.

    Pass a seeded random.Random to make the choice reproducible.
    """

    def __init__(self, catalog: ImageCatalog, rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.rng = rng or random.Random()

    def handle(self, target: str) -> HTTPResponse:
        header, image = self.catalog.pick(self.rng)
        return ResponseBuilder().json({"header": header, "image": image}).build()
