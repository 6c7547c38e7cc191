from __future__ import annotations

import os
from dataclasses import dataclass

PRODUCT_FIELDS = "id,title,product_type,tags,body_html"


def _normalize_domain(raw: str) -> str:
    domain = raw.strip()
    for prefix in ("https://", "http://"):
        if domain.startswith(prefix):
            domain = domain[len(prefix):]
    return domain.rstrip("/")


@dataclass(frozen=True)
class CatalogConfig:
    store_domain: str = ""
    access_token: str = ""
    api_version: str = "2024-10"
    page_size: int = 50
    timeout: float = 15.0

    @classmethod
    def from_env(cls) -> "CatalogConfig":
        raw_domain = os.getenv("SHOPIFY_STORE_DOMAIN") or os.getenv("SHOPIFY_STORE_URL") or ""
        return cls(
            store_domain=_normalize_domain(raw_domain),
            access_token=os.getenv("SHOPIFY_ACCESS_TOKEN", ""),
            api_version=os.getenv("SHOPIFY_API_VERSION", cls.api_version),
            page_size=int(os.getenv("SHOPIFY_PAGE_SIZE", cls.page_size)),
        )

    @property
    def base_url(self) -> str:
        return f"https://{_normalize_domain(self.store_domain)}/admin/api/{self.api_version}"


DEFAULT_CATALOG_CONFIG = CatalogConfig()
