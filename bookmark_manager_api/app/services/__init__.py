"""
Service layer abstraction.

Services encapsulate the business rules of the bookmark manager.  The
HTTP routes and the serverless handler only translate requests into
service calls, so either transport can be swapped without touching
the rules kept here.
"""
