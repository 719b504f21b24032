"""
Orchestration Layer - Workflow Coordination

This layer coordinates one pass of the filter pipeline.
- Pure workflow coordination
- No business logic
- Composes readings ingest, the scale filter and a downstream sink
"""
