"""
Load Layer - Downstream Delivery

This layer receives batches after filtering.
- In-memory and callback sinks for chaining stages
- Local file storage (Parquet, JSON) via polars
- No business logic, just hand-off and I/O operations
"""
