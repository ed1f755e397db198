"""Services Layer — imperative shell around the pairing core.

Invariants:
    - Services own transactions: each public operation commits or rolls back
    - Core rules are applied between the reads and the writes of one transaction
"""
