"""Core dispatch package.

Composition:
    - `dispatcher`: backend protocols and the mode-based dispatch.
    - `routing_types`: mode enumeration and request/result value objects.
    - `errors`: application error types rendered as error envelopes.
    - `log_setup`: logging configuration for entrypoints.

Package import itself is side-effect free.
"""
