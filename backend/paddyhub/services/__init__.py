# Services package init
"""
PaddyHub Backend: Services Layer
================================

What:  Business logic between routes (HTTP) and the document stores.
How:   Services take a session plus decoded input, apply the store operation,
       and return API schemas. They raise PaddyHubError subclasses; routes
       never build error responses themselves.

Service Inventory:
    - aggregation:          Weekday volume report (pure, no I/O)
    - CarArrivalService:    Current board read + atomic overwrite
    - ScanService:          Opaque scan documents, newest first
    - StockService:         Stock entries, Date-text listing, weekday report
"""
