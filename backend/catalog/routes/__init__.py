# Routes package init
"""
Library Catalog Backend — Routes Package
==========================================

What:  HTTP route handlers.

Route Inventory:
    - authors.py:  /catalog/authors...  (server-rendered author pages)
    - health.py:   GET /health          (service health check, JSON)

Routes stay thin: read the request, call a service, then render a template
or redirect. Business rules live in catalog.services.
"""
