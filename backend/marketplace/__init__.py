"""
Marketplace Backend — Application Package Initializer
=======================================================

Freelance marketplace backend: clients and contractors, contracts between
them, jobs billed under a contract, job payments and capped deposits.

Architecture Note:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, caller identity
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← payment, deposit, reads, reports
    ├─────────────────────────────────────┤
    │   Unit of Work & Repositories       │  ← transactions, typed queries
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
