# Middleware package init
"""
Birdhouse Backend - Middleware Package
=======================================

Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: rejected requests do no further work
    2. Request ID: sets the correlation ID used by everything after it
    3. Logging: records status and duration with that ID

Responses pass back through the same chain in reverse.
"""
