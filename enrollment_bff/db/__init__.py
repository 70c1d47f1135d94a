"""PostgreSQL access: connection pool, store errors, migrations."""
