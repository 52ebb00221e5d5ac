"""Pydantic Schemas — request/response models for the task API and the store file.

Invariants:
    - Schemas describe shapes at system boundaries (HTTP body, persisted JSON)
    - Domain enums from core/ used for priority and status fields

Design Decisions:
    - One Task model serves the API response and the file format: the stored record
      IS the returned record, so round-trips stay byte-for-byte
"""
