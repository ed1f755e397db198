"""Infrastructure Layer — database sessions and logging.

Invariants:
    - Infrastructure never imports core/ domain logic beyond the error types
"""
