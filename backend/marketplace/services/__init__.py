"""
Marketplace Backend — Services Layer
======================================

What:  Business logic layer sitting between routes (HTTP) and repositories.
Why:   Routes handle HTTP, services handle business rules.

Service Inventory:
    - PaymentService:  pay a job (transactional balance transfer)
    - BalanceService:  deposit into a client's balance (capped)
    - ContractService: party-scoped contract reads
    - JobService:      unpaid-job listing
    - AdminService:    aggregate reports over paid jobs

Every service is stateless and exposed as a module-level singleton; the
database session and the caller's Principal are passed in on each call.
"""
