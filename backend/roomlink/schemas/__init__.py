"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Wire keys are camelCase via serialization aliases; Python names stay snake_case
"""
