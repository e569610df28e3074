# Middleware package init
"""
Writing Submissions Backend — Middleware Package
=================================================

Middleware Chain (request direction):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Rate limiting runs first so rejected requests cost nothing downstream.
    The request id is set before the access log line is written.
"""
