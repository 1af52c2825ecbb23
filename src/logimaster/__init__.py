"""LogiMaster - fleet operations bookkeeping."""

__version__ = "0.1.0"
