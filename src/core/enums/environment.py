"""Application environment types.

Defines the different runtime environments for the application.
Used by Settings to determine environment-specific behavior.

Environments:
- DEVELOPMENT: Local development, stub adapters, console log renderer
- TESTING: Automated test execution with isolated database
- CI: Continuous integration environment
- PRODUCTION: Production deployment with real collaborators
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
