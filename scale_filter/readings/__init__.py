"""
Readings Layer - Sensor Reading Model and Ingest

This layer defines the batch structure the filter operates on.
- Tagged datapoint values (integer, float, string, array, object)
- Readings grouped into an ordered ReadingSet
- JSON ingest validated with pydantic, no business logic
"""
