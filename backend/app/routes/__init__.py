# Routes package init
"""
Writing Submissions Backend — API Routes Package
=================================================

Route Inventory:
    - writing.py:  GET /api/writing/submissions   (caller's submission history)
                   GET /api/writing/{id}          (one submission of the caller)
    - health.py:   GET /health                    (database connectivity probe)

Routes stay thin: resolve dependencies, call the service, set headers.
"""
