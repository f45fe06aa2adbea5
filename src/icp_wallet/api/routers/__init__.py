"""
icp_wallet.api.routers

HTTP routers: health probes, wallets/accounts, and the user store.
"""

# Package marker.
