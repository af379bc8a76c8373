"""FOP Tax Assistant - quarterly tax filing for Ukrainian sole proprietors."""

__version__ = "0.1.0"
