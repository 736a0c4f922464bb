"""Infrastructure Layer — database, storage adapters, facts file, logging.

Invariants:
    - Infrastructure implements core protocols; core never imports from here
    - All SQLAlchemy failures mapped to DatabaseError
"""
