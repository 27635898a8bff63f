# src/rocketlane_sdk/config.py
import os
from dataclasses import dataclass
from typing import Optional

from .base.pagination import DEFAULT_MAX_PAGES

DEFAULT_BASE_PATH = "/api/1.0"


@dataclass
class ClientConfig:
    """
    Settings shared by every resource of a client.

    Attributes:
        max_pages: Page cap used by the eager ``get_all`` helpers.
        page_size: Default ``pageSize`` added to list calls that set none.
        base_path: Prefix of every resource path.
    """

    max_pages: int = DEFAULT_MAX_PAGES
    page_size: Optional[int] = None
    base_path: str = DEFAULT_BASE_PATH

    def __post_init__(self):
        if not isinstance(self.max_pages, int) or self.max_pages < 1:
            raise ValueError("max_pages must be a positive integer.")
        if self.page_size is not None and (
            not isinstance(self.page_size, int) or self.page_size < 1
        ):
            raise ValueError("page_size must be a positive integer or None.")
        self.base_path = "/" + self.base_path.strip("/") if self.base_path.strip("/") else ""

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Reads ROCKETLANE_MAX_PAGES, ROCKETLANE_PAGE_SIZE and ROCKETLANE_BASE_PATH."""
        page_size = os.getenv("ROCKETLANE_PAGE_SIZE")
        return cls(
            max_pages=int(os.getenv("ROCKETLANE_MAX_PAGES", str(DEFAULT_MAX_PAGES))),
            page_size=int(page_size) if page_size else None,
            base_path=os.getenv("ROCKETLANE_BASE_PATH", DEFAULT_BASE_PATH),
        )
