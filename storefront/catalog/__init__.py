"""
Catalog access layer.

Responsibilities:
- Fetch a bounded page of products from the Shopify Admin REST API.
- Persist and reload catalog snapshots for offline runs.
- Summarise the store's tag vocabulary.
"""
