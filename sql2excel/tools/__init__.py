"""Configuration, partitioning, placeholders, database and report runner."""
