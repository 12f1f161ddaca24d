"""goimpl: find Go structs that satisfy an interface."""

__version__ = "0.1.0"
