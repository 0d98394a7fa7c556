"""Test suite for Fundkeeper core.

Test structure:
- unit/: Unit tests - services, handlers and adapters over in-memory doubles
  (tests/utils/fakes.py), moto for AWS and pytest_httpx for Resend
- integration/: Integration tests - SQLAlchemy unit of work and token
  concurrency against PostgreSQL (skipped unless DATABASE_URL is set)
"""
