"""
Service layer.

The client side of the registry lives here: the record store and its
search filter, the form and screen controllers, the notifier, and the
adapters that talk to the remote ``/person`` collection.  The
in‑memory repository behind the development API is kept alongside
them.
"""
