from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from storefront.catalog.config import PRODUCT_FIELDS, CatalogConfig
from storefront.catalog.models import CatalogItem
from storefront.catalog.shopify import ShopifyCatalog
from storefront.catalog.snapshot import CANONICAL_COLUMNS, load_catalog, save_catalog
from storefront.catalog.tags import all_product_types, all_store_tags, product_tags, tag_usage
from storefront.errors import ErrorKind

CONFIG = CatalogConfig(store_domain="https://demo-store.myshopify.com/", access_token="shpat_test", page_size=10)


def _session_returning(payload=None, status=200, exc=None) -> MagicMock:
    session = MagicMock()
    session.headers = {}
    if exc is not None:
        session.get.side_effect = exc
        return session
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    session.get.return_value = resp
    return session


# ── Models ───────────────────────────────────────────────────────────────


class TestCatalogItem:
    def test_integer_id_is_coerced(self):
        assert CatalogItem(id=123, title="Boot").id == "123"

    def test_tag_list_normalizes(self):
        item = CatalogItem(id=1, tags=" Men ,, Cotton ,")
        assert item.tag_list == ["men", "cotton"]

    def test_tag_array_is_joined(self):
        assert CatalogItem(id=1, tags=["Men", "Cotton"]).tags == "Men, Cotton"


# ── Shopify client ───────────────────────────────────────────────────────


class TestShopifyCatalog:
    def test_base_url_strips_scheme_and_slash(self):
        assert CONFIG.base_url == "https://demo-store.myshopify.com/admin/api/2024-10"

    def test_fetch_catalog_page(self):
        session = _session_returning({"products": [
            {"id": 123, "title": "Men's Suede Boot", "product_type": "Shoes", "tags": "Men, Suede"},
        ]})
        catalog = ShopifyCatalog(CONFIG, session=session)

        result = catalog.fetch_catalog_page()

        assert result.error is None
        assert [item.id for item in result.items] == ["123"]
        url = session.get.call_args.args[0]
        assert url == "https://demo-store.myshopify.com/admin/api/2024-10/products.json"
        assert session.get.call_args.kwargs["params"] == {"limit": 10, "fields": PRODUCT_FIELDS}
        assert session.headers["X-Shopify-Access-Token"] == "shpat_test"

    def test_malformed_products_are_skipped(self):
        session = _session_returning({"products": [{"title": "no id"}, {"id": 7, "title": "Polo"}]})

        result = ShopifyCatalog(CONFIG, session=session).fetch_catalog_page()

        assert [item.id for item in result.items] == ["7"]

    def test_http_error_is_reported(self):
        session = _session_returning(status=401)

        result = ShopifyCatalog(CONFIG, session=session).fetch_catalog_page()

        assert result.items == []
        assert result.error.kind == ErrorKind.transport
        assert result.error.detail == "HTTP 401"

    def test_connection_error_is_reported(self):
        session = _session_returning(exc=requests.ConnectionError("refused"))

        result = ShopifyCatalog(CONFIG, session=session).fetch_catalog_page()

        assert result.items == []
        assert result.error.kind == ErrorKind.transport

    def test_unconfigured_store_makes_no_request(self):
        session = _session_returning({"products": []})

        result = ShopifyCatalog(CatalogConfig(), session=session).fetch_catalog_page()

        assert result.error.kind == ErrorKind.configuration
        session.get.assert_not_called()

    def test_fetch_product(self):
        session = _session_returning({"product": {"id": 9, "title": "Floral Dress"}})

        item = ShopifyCatalog(CONFIG, session=session).fetch_product("9")

        assert item.title == "Floral Dress"
        assert session.get.call_args.args[0].endswith("/products/9.json")

    def test_fetch_product_failure_returns_none(self):
        session = _session_returning(status=404)
        assert ShopifyCatalog(CONFIG, session=session).fetch_product("404") is None


# ── Tag analysis ─────────────────────────────────────────────────────────


class TestTags:
    def test_product_tags_keep_casing(self, sample_catalog):
        assert product_tags(sample_catalog[0]) == ["Men", "Cotton", "Summer 25"]

    def test_all_store_tags_sorted_unique(self, sample_catalog):
        assert all_store_tags(sample_catalog) == [
            "Cotton", "Denim", "Formal", "Men", "Summer 25", "Winter 24", "Women",
        ]

    def test_all_product_types(self, sample_catalog):
        assert all_product_types(sample_catalog) == ["Bottom", "Dress", "Jacket", "Polo", "T-Shirt"]

    def test_tag_usage_orders_by_count_then_name(self, sample_catalog):
        usage = tag_usage(sample_catalog)

        assert usage[:4] == [
            {"tag": "Cotton", "count": 2},
            {"tag": "Men", "count": 2},
            {"tag": "Summer 25", "count": 2},
            {"tag": "Women", "count": 2},
        ]
        assert [u["tag"] for u in usage[4:]] == ["Denim", "Formal", "Winter 24"]

    def test_duplicate_tag_counts_once_per_product(self):
        usage = tag_usage([CatalogItem(id=1, tags="Sale, Sale")])
        assert usage == [{"tag": "Sale", "count": 1}]

    def test_empty_catalog(self):
        assert all_store_tags([]) == []
        assert tag_usage([]) == []


# ── Snapshot ─────────────────────────────────────────────────────────────


class TestSnapshot:
    def test_round_trip_preserves_order_and_fields(self, sample_catalog, tmp_path):
        path = save_catalog(sample_catalog, tmp_path / "data" / "catalog.csv")

        loaded = load_catalog(path)

        assert loaded == sample_catalog

    def test_header_has_canonical_columns(self, sample_catalog, tmp_path):
        path = save_catalog(sample_catalog, tmp_path / "catalog.csv")
        header = path.read_text().splitlines()[0]
        assert header.split(",") == CANONICAL_COLUMNS

    def test_empty_catalog(self, tmp_path):
        path = save_catalog([], tmp_path / "catalog.csv")
        assert load_catalog(path) == []

    @pytest.mark.parametrize("missing", ["body_html", "product_type"])
    def test_missing_optional_column(self, tmp_path, missing):
        columns = [c for c in CANONICAL_COLUMNS if c != missing]
        path = tmp_path / "catalog.csv"
        row = {"id": "1", "title": "Polo", "product_type": "Polo", "tags": "Cotton", "body_html": "<p>x</p>"}
        path.write_text(",".join(columns) + "\n" + ",".join(row[c] for c in columns) + "\n")

        loaded = load_catalog(path)

        assert getattr(loaded[0], missing) is None
        assert loaded[0].title == "Polo"
