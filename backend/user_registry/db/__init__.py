"""Database Metadata - SQLAlchemy declarative Base shared by models and migrations."""
