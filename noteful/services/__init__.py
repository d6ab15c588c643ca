"""
Noteful API: Services Layer
============================

Business logic between the routes (HTTP) and the database. Every public
method takes the requesting user's id and scopes its queries to it.

Service Inventory:
    - passwords:        bcrypt hash / verify
    - AuthService:      login, JWT issue / decode
    - UserService:      signup with credential validation
    - ReferenceValidator: folder / tag ownership checks before note writes
    - NoteService:      note CRUD, filtering and full-text search
    - FolderService / TagService: named-resource CRUD
"""
