"""
icp_wallet.db

Persistence package (SQLAlchemy async) backing the wallet user store.

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.
