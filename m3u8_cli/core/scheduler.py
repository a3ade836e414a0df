"""
Splits the segment list into the contiguous chunks handed to the fetch workers.
"""


def effective_workers(requested: int, total: int) -> int:
    """Never more workers than segments, and always at least one."""
    return max(1, min(requested, total))


def partition(segments: list[str], workers: int) -> list[list[str]]:
    """
    Partitions `segments` into at most `workers` contiguous, non-empty chunks.

    When the list does not divide evenly, the first chunks take one extra
    segment each, so chunk sizes differ by at most one. Concatenating the
    chunks yields `segments` unchanged.

    Raises:
        ValueError: If `workers` is less than one.
    """
    if workers < 1:
        raise ValueError(f"Worker count must be at least 1, got {workers}.")
    if not segments:
        return []

    count = effective_workers(workers, len(segments))
    base, extra = divmod(len(segments), count)

    chunks = []
    start = 0
    for index in range(count):
        size = base + 1 if index < extra else base
        chunks.append(segments[start : start + size])
        start += size
    return chunks
