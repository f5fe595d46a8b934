# Middleware package init
"""
PaddyHub Backend: Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Body Limit] → [GZip] → [CORS] → Route Handler

    1. Request ID first so every later log line can carry it
    2. Logging measures the full duration, rejected requests included
    3. Body Limit refuses oversized uploads before anything reads them
"""
