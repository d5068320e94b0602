"""
myuzik: download YouTube audio and organize it into persistent playlists.
"""

__version__ = "0.1.0"
