# Services package init
"""
TechNotes Backend — Services Layer
====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).

Service Inventory:
    - NoteService: list / create / update / delete rules for notes
    - NoteStore, UserStore: async SQLAlchemy access used by NoteService
"""
