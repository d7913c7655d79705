"""Infrastructure Layer: the outbound HTTP client and logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All transport failures are mapped to core/errors.py types before leaving this layer
"""
