# Middleware package init
"""
TechNotes Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the logging middleware can tag its access line
    with the id; the id is also echoed in the X-Request-ID response header.
"""
