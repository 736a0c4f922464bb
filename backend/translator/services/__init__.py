"""Services Layer — History Store and the shared facts cache.

Invariants:
    - Services talk to storage only through core protocols (KeyValueStorage, FactsLoader)
    - Services own logging and error mapping; routes stay thin
"""
