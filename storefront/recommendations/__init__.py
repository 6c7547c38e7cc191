"""
Recommendation engine.

Responsibilities:
- Infer category and gender from the parsed intent.
- Filter the catalog snapshot by category and gender.
- Score candidates with a configurable strategy.
- Rank, threshold and truncate to a short result list.
"""
