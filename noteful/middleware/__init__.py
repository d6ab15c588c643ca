"""
Noteful API: Middleware Package
================================

Middleware Chain:
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Rate limit first: credential-guessing traffic is rejected before any work.
    2. Request ID: sets the correlation id every later log line uses.
    3. Logging: one access line per request with status and duration.
"""
