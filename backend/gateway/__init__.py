"""Integration Gateway — one JSON/REST surface over SOAP, OAuth2 and REST upstreams.

Invariants:
    - Package root contains no executable code beyond the version string
"""

__version__ = "1.0.0"
