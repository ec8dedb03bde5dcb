# Services package init
"""
Library Catalog Backend — Services Layer
==========================================

What:  Business logic between the routes (HTTP, templates) and the
       repositories (persistence).
How:   Services take plain inputs (path ids, submitted form mappings) and
       return outcome objects; they never build responses themselves.

Service Inventory:
    - validation.py:      FieldRules chains, validate(), ISO-8601 date parsing
    - author_service.py:  AuthorService — list, detail, create, update, delete
"""
