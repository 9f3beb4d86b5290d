"""
Mock integration clients.

These clients keep everything in memory and never call an external API.
They are used when:
- INTEGRATIONS_MODE=mock (local development without credentials)
- Tests need a board/messaging/identity double with scripted failures

Important:
- Mock clients follow the SAME interfaces as the real HTTP clients.
- Mock clients return data shaped according to src/integrations/contracts/*
"""
