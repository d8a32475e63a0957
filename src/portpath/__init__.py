"""portpath - portable path strings and filesystem mutation.

A validated, forward-slash canonical path representation that understands
drive letters, UNC shares and POSIX roots, plus result-returning operations
to inspect, create, rename and destroy filesystem entries.
"""

__version__ = "0.1.0"
