"""Shared configuration, schemas, persistence and HTTP utilities."""
