"""
Lua Code Index: symbol indexing and go-to-definition for Lua workspaces.
"""

__version__ = "0.1.0"
