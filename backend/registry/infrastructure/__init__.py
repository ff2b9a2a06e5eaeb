"""Infrastructure Layer — database access, snapshot persistence, logging.

Invariants:
    - Infrastructure never imports core domain logic beyond errors and protocols
    - All database failures surface as DatabaseError
"""
