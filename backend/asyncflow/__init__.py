"""asyncflow: IP to temperature lookup, expressed in five control-flow styles.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
