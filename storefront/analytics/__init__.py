"""
In-memory diagnostics for recommendation queries.
"""
