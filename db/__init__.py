"""
db/ - Database Layer
====================
Handles the MySQL/PostgreSQL connection pool, placeholder translation,
JSON column encoding, schema initialization, and sample data.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
