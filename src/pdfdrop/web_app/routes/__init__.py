from . import index, upload

__all__ = ["index", "upload"]
