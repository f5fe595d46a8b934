"""
PaddyHub Backend: Application Package Initializer
=================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← store operations, weekday report
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │    Database (three document stores) │  ← car, qr, stock
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
