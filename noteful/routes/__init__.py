"""
Noteful API: Routes Package
============================

Route Inventory:
    - users.py:    POST /api/users              (signup, public)
                   POST /api/login              (token, public)
                   POST /api/refresh            (token refresh)
    - notes.py:    GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}
    - folders.py:  GET/POST /api/folders, GET/PUT/DELETE /api/folders/{id}
    - tags.py:     GET/POST /api/tags, GET/PUT/DELETE /api/tags/{id}
    - health.py:   GET /health

Routes stay thin: they read the request, call a service with the caller's
user id, and shape the response (status code, Location header).
"""
