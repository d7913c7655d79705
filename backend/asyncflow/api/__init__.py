"""API Layer: FastAPI routes and global error handlers.

Invariants:
    - The only place domain results are translated into HTTP responses
"""
