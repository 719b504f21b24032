"""
Plugin Layer - Filter Lifecycle and Configuration

This layer is the boundary the host pipeline talks to.
- Configuration category with defaults and text values
- Filter handle created once, ingested many times, shut down once
- Hands every batch to the downstream sink exactly once
"""
