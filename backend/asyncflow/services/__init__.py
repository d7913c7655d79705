"""Services Layer: the temperature pipeline under five control-flow styles.

Invariants:
    - Every adapter sequences the same core/pipeline.py functions
    - Stage 2 never starts before stage 1 succeeded
    - Services never touch FastAPI request/response types

Design Decisions:
    - One module per style so each reads as a standalone example of that style
"""
