"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool and the optional schema bootstrap.
This layer is the lowest in the architecture and has no dependencies on other layers
besides configuration.
"""
