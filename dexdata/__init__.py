"""Runtime side of the dex: codes, compiled records, the store, and the resolver.

Nothing in this package reads raw snapshot documents; it only consumes
compiled tables.
"""
