"""foldercontext: import a directory tree of text files into a conversation context."""

from foldercontext.version import __version__

__all__ = ["__version__"]
