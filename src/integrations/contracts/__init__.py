"""
Contracts (data models).

This folder defines the request/response shapes for external integrations:
- Monday.com board options and item write results (board.py)
- Resend contacts, segments and enrollment outcomes (messaging.py)
- Identity provider users and sessions (identity.py)
- The abstract client interfaces every mock and real client implements (interfaces.py)

Both mock and real HTTP clients should use these contracts.
"""
