# Routes package init
"""
PaddyHub Backend: API Routes Package
====================================

Route Inventory:
    - root.py:         GET  /                    (plain-text liveness banner)
    - car_arrival.py:  GET  /carArrival          (current board)
                       POST /carArrival          (overwrite board)
    - scans.py:        POST /api/scans           (store a scan)
                       GET  /api/scans           (all scans, newest first)
    - stocks.py:       GET  /api/stocks/all      (all entries, Date desc)
                       GET  /api/stocks/daily    (weekday volume report)
                       POST /api/stocks          (append an entry)
    - health.py:       GET  /health              (store connectivity)

Routes stay thin: decode the request, call one service, return its result.
"""
