"""Integration tests for recipebox.

These tests require a PostgreSQL database (TEST_DATABASE_URL).

Run with: pytest tests/integration/ -v -m integration
"""
