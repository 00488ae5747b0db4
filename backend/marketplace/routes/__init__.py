# Routes package init
"""
Marketplace Backend — API Routes Package
==========================================

Route Inventory:
    - contracts.py: GET  /contracts, GET /contracts/{id}
    - jobs.py:      GET  /jobs/unpaid, POST /jobs/{id}/pay
    - balances.py:  POST /balances/deposit/{user_id}
    - admin.py:     GET  /admin/best-profession, GET /admin/best-clients
    - health.py:    GET  /health

Design Principle:
    Routes are THIN: resolve the caller, call the service, return its model.
    Errors are raised as MarketplaceError subclasses and formatted by the
    global handlers in main.py.
"""
