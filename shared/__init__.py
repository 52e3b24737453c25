"""
Shared Kernel

Base classes, the in-memory store and the unit of work shared by every
app of the rental core.
"""
