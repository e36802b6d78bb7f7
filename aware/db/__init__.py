from aware.db.connection import DatabaseConnection

__all__ = ["DatabaseConnection"]
