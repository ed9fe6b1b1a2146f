"""Resolution layer — find endpoints, stacks, and cluster IDs by name.

Resolvers receive a :class:`~psuctl.infrastructure.client.PortainerClient`
at construction time and fetch fresh data on every call.  They raise
:mod:`psuctl.domain.errors` exceptions and let transport errors propagate.
They must never import from services, commands, or output.
"""
