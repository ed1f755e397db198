"""Core Layer — pure pairing domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic (randomness injected)

Design Decisions:
    - Functional core separated from imperative shell: the state machine rules
      live here, the transactions that apply them live in services/
"""
