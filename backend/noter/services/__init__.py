# Services package init
"""
Noter Backend — Services Layer
==============================

What:  Business logic between routes (HTTP) and the record store.

Service Inventory:
    - NoteService: list / get / create / update / delete against the store
    - note_rules:  ids, timestamps, and field checks shared with the
                   offline client store
"""
