"""
Application package initializer.

The service is organised into small layers: ``core`` holds settings,
logging, exceptions and the record store; ``repositories`` own the key
schemes of the two collections; ``services`` hold the business logic
and ``api`` exposes it over HTTP.  Versioning is handled by grouping
routers under the ``api/<version>/`` hierarchy.
"""
