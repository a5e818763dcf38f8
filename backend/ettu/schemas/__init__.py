"""
ETTU Backend — Pydantic Schemas
=================================

API contracts, kept separate from the SQLAlchemy rows in ettu.models:
rows hold storage encodings (status strings, JSON blobs); schemas hold
what clients see (enums, typed lists).
"""
