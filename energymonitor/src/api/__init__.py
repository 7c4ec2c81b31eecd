"""
HTTP API serving power-balance summaries to dashboards.

CHANGELOG:
- 2026-10-16: Initial creation (STORY-008)
"""
