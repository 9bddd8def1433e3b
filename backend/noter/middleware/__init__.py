# Middleware package init
"""
Noter Backend — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS preflight] → [CORS headers] → [Request ID] → [Logging] → Route Handler

    - CORS preflight answers OPTIONS before anything else runs
    - CORS headers stamps Access-Control-* on every other response
    - Request ID sets the correlation ID used by logs and the response header
    - Logging records status and duration once the handler has finished
"""
