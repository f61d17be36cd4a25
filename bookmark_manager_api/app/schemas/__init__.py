"""
Pydantic schema definitions for API payloads.

Request bodies, stored records and response envelopes are declared
here so that the transport adapters and the store agree on a single
representation.
"""
