"""
Repositories wrap the record store for one collection each and own
that collection's key scheme.
"""
