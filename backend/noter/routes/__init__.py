# Routes package init
"""
Noter Backend — API Routes Package
==================================

Route Inventory:
    - notes.py:   GET/POST /notes, GET/PUT/DELETE /notes/{id}
    - health.py:  GET /health

Routes stay thin: extract path and body, call NoteService, pick the
status code. Business rules live in services.
"""
