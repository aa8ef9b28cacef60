"""Walkers that total up the folders, files and bytes beneath a directory.

Two implementations share the same interface:
- SequentialWalker visits the tree depth-first on the calling thread
- ConcurrentWalker fans out each directory's files and subdirectories
  to a thread pool and joins them before the directory is considered done

Both take a root path in run() and return a WalkResult. Directories that
can't be listed are skipped (see the errors parameter), so the totals are
a best-effort summary of whatever could be read.
"""


from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
import threading
from pardu import _fsutil


ERRORS_SKIP = 'skip'
ERRORS_ACCESS = 'access'
ERROR_POLICIES = [ERRORS_SKIP, ERRORS_ACCESS]

_log = logging.getLogger(__name__)


class WalkError(Exception):
    """Base class for errors that stop a walk."""
    pass


class RootAccessError(WalkError):
    """Indicates the root directory of a walk could not be listed.

    The underlying OSError is available as __cause__.
    """
    def __init__(self, path, error):
        super().__init__(f'{path}: {error}')
        self.path = path


@dataclass(frozen=True)
class WalkResult:
    """Totals for one walk."""
    folder_count: int = 0
    file_count: int = 0
    byte_count: int = 0

    def __add__(self, other):
        return WalkResult(self.folder_count + other.folder_count,
                          self.file_count + other.file_count,
                          self.byte_count + other.byte_count)


_EMPTY = WalkResult()


class _Walker:
    def __init__(self, *, errors=ERRORS_SKIP, scan=None, size=None):
        """Creates a walker.

        errors decides which failures are skipped rather than raised:
        - "skip" (default): any OSError while listing a directory or
          reading a file's size drops that directory or file
        - "access": only PermissionError is skipped; other errors
          propagate out of run()

        scan and size replace _fsutil.scan_directory and
        _fsutil.file_size, respectively.
        """
        if errors not in ERROR_POLICIES:
            raise ValueError(f'invalid error policy (expected one of '
                             f'{ERROR_POLICIES}): {errors}')
        self.errors = errors
        self._scan = scan or _fsutil.scan_directory
        self._size = size or _fsutil.file_size

    def _tolerates(self, error):
        if isinstance(error, PermissionError):
            return True
        return self.errors == ERRORS_SKIP

    def _skip(self, path, error):
        """Logs and returns True if the error is skippable."""
        if not self._tolerates(error):
            return False
        _log.debug('skipping %s: %s', path, error)
        return True

    def _scan_root(self, root):
        listing = self._scan(root)
        if listing.error is not None:
            raise RootAccessError(root, listing.error) from listing.error
        return listing


class SequentialWalker(_Walker):
    """Walks the tree depth-first on the calling thread."""

    def _count_files(self, files):
        count = 0
        total = 0
        for path in files:
            try:
                total += self._size(path)
            except OSError as e:
                if not self._skip(path, e):
                    raise
                continue
            count += 1
        return count, total

    def run(self, root):
        """Returns the WalkResult for everything beneath root.

        Raises RootAccessError if root itself can't be listed.
        """
        listing = self._scan_root(root)
        folders = 0
        files, total = self._count_files(listing.files)

        pending = [iter(listing.subdirectories)]
        while pending:
            path = next(pending[-1], None)
            if path is None:
                pending.pop()
                continue
            listing = self._scan(path)
            if listing.error is not None:
                if not self._skip(path, listing.error):
                    raise listing.error
                continue
            folders += 1
            count, size = self._count_files(listing.files)
            files += count
            total += size
            pending.append(iter(listing.subdirectories))

        return WalkResult(folders, files, total)


class _Join:
    """Wait-group for the units dispatched from one directory.

    Each finished unit hands its partial result to done(). When the last
    one has finished, the merged total is passed on to the parent join.
    The join starts with one outstanding unit, held by whoever is
    dispatching its children, so it can't finish before dispatch is over.
    """
    def __init__(self, parent=None, result=_EMPTY):
        self.parent = parent
        self.result = result
        self.error = None
        self.finished = threading.Event()
        self._pending = 1
        self._lock = threading.Lock()

    def add(self):
        with self._lock:
            self._pending += 1

    def done(self, partial=_EMPTY, error=None):
        join = self
        while join is not None:
            with join._lock:
                join.result += partial
                if join.error is None:
                    join.error = error
                join._pending -= 1
                if join._pending:
                    return
            join.finished.set()
            partial, error = join.result, join.error
            join = join.parent


class ConcurrentWalker(_Walker):
    """Walks the tree using a thread pool.

    Every file size lookup and every subdirectory is a separate unit of
    work. Partial totals are merged as units finish, so the result is the
    same as SequentialWalker's regardless of scheduling.
    """

    def run(self, root):
        """Returns the WalkResult for everything beneath root.

        Raises RootAccessError if root itself can't be listed. Under the
        "access" error policy, the first unskippable error is raised once
        all dispatched work has finished.
        """
        listing = self._scan_root(root)
        join = _Join()
        with ThreadPoolExecutor() as executor:
            self._dispatch(executor, listing, join)
            join.finished.wait()
        if join.error is not None:
            raise join.error
        return join.result

    def _dispatch(self, executor, listing, join):
        error = None
        try:
            for path in listing.files:
                join.add()
                executor.submit(self._count_file, path, join)
            for path in listing.subdirectories:
                join.add()
                executor.submit(self._descend, executor, path, join)
        except BaseException as e:
            error = e
            raise
        finally:
            join.done(error=error)

    def _count_file(self, path, join):
        partial = _EMPTY
        error = None
        try:
            partial = WalkResult(0, 1, self._size(path))
        except OSError as e:
            if not self._skip(path, e):
                error = e
        except Exception as e:
            error = e
        except BaseException as e:
            error = e
            raise
        finally:
            join.done(partial, error)

    def _descend(self, executor, path, parent):
        # once dispatched, the child join reports to parent instead
        dispatched = False
        error = None
        try:
            listing = self._scan(path)
            if listing.error is None:
                child = _Join(parent, WalkResult(1))
                dispatched = True
                self._dispatch(executor, listing, child)
            elif not self._skip(path, listing.error):
                error = listing.error
        except Exception as e:
            error = e
        except BaseException as e:
            error = e
            raise
        finally:
            if not dispatched:
                parent.done(error=error)
