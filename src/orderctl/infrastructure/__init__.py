"""Persistence: SQLite store, repositories, and seed data."""
