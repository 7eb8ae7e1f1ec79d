"""
Tests Package - Unit and Integration Tests

Test structure:
- tests/conftest.py - Shared pytest fixtures (SQLite stores in tmp_path,
  stubbed HTTP providers)
- tests/test_*.py - One module per component

External providers are stubbed with httpx.MockTransport and stores run
against throwaway SQLite files, so no network or service is required.
"""
