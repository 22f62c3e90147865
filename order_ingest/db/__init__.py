"""PostgreSQL access for the database order store."""
