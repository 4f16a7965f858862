"""Services Layer — query functions, invoice actions, sign-in and seeding.

Invariants:
    - Store handles are passed in by the caller; services never build engines
    - Reads raise DataFetchError on store failure; actions return messages instead
"""
