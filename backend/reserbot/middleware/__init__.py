# Middleware package init
"""
ReserBot Backend — Middleware Package
=======================================

Request → [Request ID] → [Access Logging] → [GZip] → [CORS] → Route Handler

Request ID runs first so the access log line and every error log entry of a
request carry the same correlation ID.
"""
