from collections import namedtuple
import os


Listing = namedtuple('Listing', ['subdirectories', 'files', 'error'])
Listing.__doc__ = """Immediate children of one directory.

If the directory could not be listed, both lists are empty and error
holds the OSError that was raised; otherwise error is None.
"""


def scan_directory(path):
    """Returns a Listing of the immediate children of the given path.

    Entries are reported in enumeration order, not sorted. A directory
    entry counts as a subdirectory only if it is a real directory;
    symlinks to directories are reported as files, so they are never
    descended into. Failures are returned in the Listing instead of
    being raised.
    """
    subdirectories = []
    files = []
    try:
        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(entry.path)
                else:
                    files.append(entry.path)
    except OSError as e:
        return Listing([], [], e)
    return Listing(subdirectories, files, None)


def file_size(path):
    """Returns the size in bytes of the file at the given path.

    Symlinks are not followed. Raises OSError if the file can't be
    queried, e.g. because it was removed after being listed.
    """
    return os.stat(path, follow_symlinks=False).st_size
