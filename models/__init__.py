"""
models/ - Domain Layer
======================
Plain dataclasses for projects and milestones, plus the partial-update
values used by the data access layer. No I/O lives here.
"""
