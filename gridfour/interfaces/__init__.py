"""
gridfour.interfaces - User interfaces for the gridfour game
"""

# Don't import anything here to avoid circular imports
__all__ = []
