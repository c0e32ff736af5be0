# Routes package init
"""
TechNotes Backend — API Routes Package
========================================

Route Inventory:
    - notes.py:   GET    /notes   (list notes with owner usernames)
                  POST   /notes   (create note)
                  PATCH  /notes   (update note)
                  DELETE /notes   (delete note)
    - health.py:  GET    /health  (service health check)

Routes stay thin: they parse the request, call NoteService and return its
result. Status codes for failures come from the exception handlers in main.py.
"""
