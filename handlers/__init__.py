"""
handlers/ - Presentation Layer
================================
HTTP route handlers. Each handler parses the request,
delegates to the appropriate Service, and returns the result as JSON.
No business logic lives here.
"""
