"""
Per-domain repository modules for database access.

Routers import these as `from spending_tracker.db.repositories import expenses as expense_repo`.
"""
