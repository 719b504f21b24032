"""
Transformation Layer - Pure, In-Place Batch Transforms

This layer contains the filter's business logic.
- Operates on a ReadingSet in place
- No I/O operations
- Unit testable
- Deterministic results
"""
