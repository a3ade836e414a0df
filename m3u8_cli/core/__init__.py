"""
Core application engine for orchestrating the download process.

This package contains the primary logic. The `DownloadManager` acts as the
run coordinator, delegating the split of the segment list to the scheduler
and the transfers themselves to the media layer.
"""
