from __future__ import annotations

import logging
from typing import Any

import requests
from pydantic import ValidationError

from ..errors import ComponentError, ErrorKind
from .config import DEFAULT_CATALOG_CONFIG, PRODUCT_FIELDS, CatalogConfig
from .models import CatalogFetchResult, CatalogItem

logger = logging.getLogger(__name__)

_COMPONENT = "catalog"


def _transport_error(detail: str) -> ComponentError:
    return ComponentError(kind=ErrorKind.transport, component=_COMPONENT, detail=detail)


class ShopifyCatalog:
    """Read-only Shopify Admin REST client limited to what the recommender needs."""

    def __init__(
        self,
        config: CatalogConfig = DEFAULT_CATALOG_CONFIG,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": config.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        resp = self.session.get(url, params=params or {}, timeout=self.config.timeout)
        resp.raise_for_status()
        return resp.json() or {}

    def fetch_catalog_page(self) -> CatalogFetchResult:
        """
        Fetch one page of products (``page_size`` items at most).

        Never raises: transport, HTTP and decoding failures come back as an
        empty item list with a transport error attached.
        """
        if not self.config.store_domain or not self.config.access_token:
            return CatalogFetchResult(error=ComponentError(
                kind=ErrorKind.configuration,
                component=_COMPONENT,
                detail="store domain or access token not configured",
            ))

        params = {"limit": self.config.page_size, "fields": PRODUCT_FIELDS}
        try:
            data = self._get("/products.json", params)
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            logger.warning("Catalog fetch failed with HTTP %s from %s", status, self.config.base_url)
            return CatalogFetchResult(error=_transport_error(f"HTTP {status}"))
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Catalog fetch failed for %s", self.config.base_url, exc_info=True)
            return CatalogFetchResult(error=_transport_error(str(exc)))

        items: list[CatalogItem] = []
        for raw in data.get("products") or []:
            try:
                items.append(CatalogItem(**raw))
            except ValidationError:
                logger.warning("Skipping malformed product payload: %r", raw.get("id"))

        logger.info("Fetched %d catalog items", len(items))
        return CatalogFetchResult(items=items)

    def fetch_product(self, product_id: str) -> CatalogItem | None:
        """Return a single product, or ``None`` when it cannot be fetched."""
        try:
            data = self._get(f"/products/{product_id}.json", {"fields": PRODUCT_FIELDS})
            raw = data.get("product")
            return CatalogItem(**raw) if raw else None
        except (requests.RequestException, ValueError, ValidationError):
            logger.warning("Product fetch failed for %s", product_id, exc_info=True)
            return None
