import os

# Use in-memory sqlite for tests; must be set before grecko.db is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("TIMEZONE", "UTC")
