"""Design Editor API.

Backend for a text/design editor: stores uploaded fonts and images,
persists rendered designs and serves them back by id.
"""

__version__ = "1.0.0"
