"""Database plumbing shared by SQLAlchemy adapters."""
