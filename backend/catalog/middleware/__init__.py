# Middleware package init
"""
Library Catalog Backend — Middleware Package
==============================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    - Request ID runs first so every log line and error page of the request
      can carry the same correlation id.
    - Logging measures the full handler duration and logs the final status.
"""
