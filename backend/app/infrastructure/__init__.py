"""Infrastructure Layer — store access, logging, view revalidation and password hashing.

Invariants:
    - Infrastructure never imports services/ or api/
    - Collaborators are constructed in the app lifespan and reached via app.state

Design Decisions:
    - Explicit construction over module-level singletons: tests swap them on app.state
"""
