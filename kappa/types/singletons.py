from __future__ import annotations


class NullType:
    """The empty list."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "()"


class VoidType:
    """Result of forms evaluated only for effect."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "#<void>"


class TerminateType:
    """Produced by (exit); the driver ends the session when it sees it."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "#<terminate>"


Null = NullType()
Void = VoidType()
Terminate = TerminateType()
