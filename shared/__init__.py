"""
Shared Kernel

Immutable domain building blocks (entities, value objects, events, the
error taxonomy) and the application plumbing around them: the Unit of
Work and the Message Bus.
"""
