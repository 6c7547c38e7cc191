"""
Storefront product recommender.

Turns free-text shopper queries into a short ranked list of catalog items
using an LLM intent parser, deterministic category/gender inference, a
filter stage and pluggable scoring strategies.
"""
