from .server.registrants import insert

assert insert

____ = None
