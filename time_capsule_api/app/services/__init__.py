"""
Service layer.

Services encapsulate the capsule rules and talk to the store; the
HTTP handlers only translate between requests and service calls.
"""
