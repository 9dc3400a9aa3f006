"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a set of domain entities.
Repositories receive raw rows from the injected database object and return domain model objects.
"""
