"""Application layer - Use cases and orchestration.

Structure:
- commands/: Command dataclasses and handlers (write operations)
- queries/: Query dataclasses and handlers (read operations)
- services/: Cross-system workflows (token store, attachment saga,
  credential transaction, notification dispatch, orphan sweep)
- saga.py: Compensating saga used by the attachment workflows

The application layer orchestrates domain logic; persistence and remote
systems are reached only through domain protocols.
"""
