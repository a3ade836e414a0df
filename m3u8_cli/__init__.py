"""
m3u8-cli: a concurrent downloader for the media segments of an HLS playlist.
"""

__version__ = "1.0.0"
