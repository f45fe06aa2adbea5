"""
icp_wallet.ledger

Ledger collaborator boundary.

Responsibilities:
- Query account balances from a Rosetta node over HTTP.
"""

# Package marker.
