from datetime import datetime
from datetime import timezone


def format_counts(result):
    """Returns a line like "1,024 folders, 8,192 files, 65,536 bytes"."""
    return (f'{result.folder_count:,} folders, '
            f'{result.file_count:,} files, '
            f'{result.byte_count:,} bytes')


def format_run(label, result, seconds):
    """Returns the report for one walker run, as two lines of text.

    The label names the walker, e.g. "Sequential" or "Parallel".
    """
    return (f'{label} Calculated in: {seconds}s\n'
            + format_counts(result) + '\n')


def timed_run(walker, root):
    """Runs the walker on root.

    Returns a tuple of the WalkResult and the elapsed time in seconds.
    Exceptions from the walker propagate.
    """
    start = datetime.now(timezone.utc)
    result = walker.run(root)
    elapsed = datetime.now(timezone.utc) - start
    return result, elapsed.total_seconds()
