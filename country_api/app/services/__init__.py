"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives
its repositories at construction time, so handlers and tests can wire
them to any record store.
"""
