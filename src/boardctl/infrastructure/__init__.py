"""Infrastructure layer — SQLite engine, schema, ordered collections, store.

Depends on stdlib, SQLAlchemy, and the pure domain layer. It must never
import from services, client, commands, or output.
"""
