# Middleware package init
"""
WoofPoint Backend — Middleware Package
========================================

Middleware Chain:
    Request → [Rate Limit] → [Request ID] → [Access Log] → [CORS] → Route

    1. Rate Limit: only POST /api/auth/login and /api/auth/signup are counted
    2. Request ID: correlation id in a ContextVar and the X-Request-ID header
    3. Access Log: one line per request with status and duration
"""
