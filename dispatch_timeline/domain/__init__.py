"""
Domain Layer

Business logic of the timeline, independent of any rendering host.

Components:
- timeline/: layout of resource rows, travel inference, ECBT and the time axis
- shared/: errors shared across subdomains
"""
