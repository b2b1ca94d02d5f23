"""Client layer — optimistic drag-and-drop over a local board tree.

Holds view models, pure position helpers, the board data store, the drag
session state machine, and the ``BoardApi`` boundary to the server. It
may import services only through :mod:`boardctl.client.api`.
"""
