"""Pydantic Schemas: response contracts for API endpoints.

Design Decisions:
    - Separate from core/domain_types.py: schemas are wire contracts, domain types are values
"""
