"""
Real HTTP integration clients.

These clients communicate with the real external systems via httpx:
- Monday.com GraphQL API (contacts board)
- Resend REST API (contacts and segments)
- Firebase Identity Toolkit (admin credential provisioning)

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to src/integrations/contracts/*
- Must raise src/integrations/errors.py types, never raw httpx exceptions

Switching:
The selection of mock vs real clients happens in src/api/dependencies.py only.
"""
