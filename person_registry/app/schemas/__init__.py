"""
Pydantic schema definitions.

``person`` defines the records exchanged with the remote ``/person``
collection and the form model used to validate user input before it
is sent.
"""
