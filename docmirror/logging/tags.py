# docmirror/logging/tags.py
"""
Logging subsystem tags.

Prefix every log message with one of these so output stays greppable.
"""

GITHUB = "[GITHUB]"
FILTER = "[FILTER]"
FETCH = "[FETCH]"
TRANSFORM = "[TRANSFORM]"
WRITE = "[WRITE]"
PIPELINE = "[PIPELINE]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
