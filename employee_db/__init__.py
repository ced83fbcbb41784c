"""Employee table manager: schema, inserts, criteria queries and index timing on PostgreSQL."""

__version__ = "1.0.0"
