"""
Application package.

``core`` holds configuration, logging, error types and date helpers.
``schemas`` defines the Pydantic models exchanged with the remote
service.  ``services`` contains the client‑side state layer and the
remote service adapters, ``api`` the routes of the development API and
``console`` a text front end that drives the screen controller.

The development API application is built in ``main`` and is not
imported here so that importing the client layer has no side effects.
"""
