"""Profile Studio - GitHub profile README templates.

Renders declarative templates and profile data into README markdown and
an HTML preview.
"""

__version__ = "0.1.0"
