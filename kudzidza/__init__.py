"""
Kudzidza - Shona vocabulary course with lesson progression tracking.

Sub-packages:
- schemas: Pydantic models for course content and learner progress
- classroom: catalog, persistence, progress tracking and navigation
- utils: YAML content loading helpers
"""

__version__ = "0.1.0"
