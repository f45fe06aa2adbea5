"""
icp_wallet.services

Service layer.

Responsibilities:
- Compose core primitives, the ledger client, and the user store into wallet flows.
"""

# Package marker.
