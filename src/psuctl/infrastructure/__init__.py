"""Infrastructure layer — the Portainer HTTP client.

This layer depends on stdlib, httpx, and the domain models it parses
responses into.  It must never import from services, commands, or output.
"""
