"""objweld: Wavefront OBJ ingestion into welded, renderer-ready mesh buffers."""

__version__ = "0.1.0"
