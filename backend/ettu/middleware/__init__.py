"""
ETTU Backend — Middleware Package
===================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Rate Limit]* → [Request ID] → [Logging] → [CORS] → Route Handler

    * only when RATE_LIMITING is enabled

    Rate limiting runs first so rejected requests cost nothing further.
    Request ID wraps logging so every access-log line carries the ID.
"""
