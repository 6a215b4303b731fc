"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Queries are written once with ``%s`` markers; the Database they are given
rewrites them for the active engine. Repositories return domain model objects.
"""
