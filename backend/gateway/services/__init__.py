"""Services Layer — one adapter per upstream kind plus the credential resolver.

Invariants:
    - Each adapter performs at most one outstanding upstream call at a time
    - Every upstream failure leaves this layer as UpstreamError
"""
