"""
Shared Kernel

Base classes and utilities shared by the hall booking apps: domain events,
value objects, the error taxonomy, the unit of work and the message bus.
"""
