"""Service layer: use cases orchestrated over units of work.

Subpackages
-----------
- ``_shared``: base service, request context, domain errors, ports, policies.
- ``auth``: login / refresh / logout and the refresh-token lifecycle.
- ``identity``: registration and user administration.
- ``roles``, ``departments``, ``tickets``, ``comments``, ``assignments``:
  resource services.
"""
