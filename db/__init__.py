"""
db/ - Database Layer
====================
Opens the PostgreSQL session, creates the database and schema, and defines
the exceptions the storage side reports.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
