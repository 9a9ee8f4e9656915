"""Beginner-friendly overview for this module.

WHAT: FastAPI dependencies shared by the routers.
WHEN: Resolved per request by FastAPI's ``Depends``.
WHY: Tests replace them through ``app.dependency_overrides``.
"""
