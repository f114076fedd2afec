"""
Service layer modules.

Business logic that is independent of HTTP routing and persistence lives here.
"""
