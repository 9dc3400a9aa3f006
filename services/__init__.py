"""
services/ - Business Logic Layer
================================
Visibility rules applied between the repositories and the HTTP handlers.
"""
