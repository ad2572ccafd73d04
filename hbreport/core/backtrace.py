"""Stack capture and path filtering.

Backtraces are captured fresh for every report by walking the live call
stack. File paths are shortened by replacing the interpreter's standard
library directory and the detected project root with fixed tokens.
"""

import inspect
import os
import site
import sys
import sysconfig
from collections.abc import Sequence

from .models import BacktraceFrame

PYTHON_ROOT_TOKEN = "[PYTHON_ROOT]"
PROJECT_ROOT_TOKEN = "[PROJECT_ROOT]"
UNKNOWN_METHOD = "unknown"

PYTHON_ROOT = sysconfig.get_paths().get("stdlib", "")

_PACKAGE_DIRS = ("site-packages", "dist-packages")


def _interpreter_prefixes() -> tuple[str, ...]:
    prefixes = {sys.prefix, sys.base_prefix, sys.exec_prefix, PYTHON_ROOT}
    user_site = getattr(site, "USER_SITE", None)
    if user_site:
        prefixes.add(user_site)
    return tuple(os.path.abspath(p) for p in prefixes if p)


def filter_path(file: str, project_root: str = "", python_root: str | None = None) -> str:
    """Replace a leading interpreter or project path with its token.

    Only a prefix anchored at the start of the path is replaced, so a
    directory that merely contains the root somewhere in the middle is left
    untouched.

    Args:
        file: Absolute path of the source file.
        project_root: Detected project root; skipped when empty.
        python_root: Standard library directory; defaults to the running
            interpreter's.

    Returns:
        The filtered path.
    """
    if python_root is None:
        python_root = PYTHON_ROOT

    if python_root and file.startswith(python_root):
        file = PYTHON_ROOT_TOKEN + file[len(python_root):]

    if project_root and file.startswith(project_root):
        file = PROJECT_ROOT_TOKEN + file[len(project_root):]

    return file


def method_name(frame) -> str:
    """Qualified name of the function executing in frame."""
    code = frame.f_code
    name = getattr(code, "co_qualname", None) or code.co_name
    if not name:
        return UNKNOWN_METHOD

    module = frame.f_globals.get("__name__")
    if module:
        return f"{module}.{name}"
    return name


def capture_backtrace(
    skip: int = 0,
    project_root: str = "",
    python_root: str | None = None,
) -> tuple[BacktraceFrame, ...]:
    """Capture the current call stack, innermost frame first.

    Args:
        skip: Number of frames above the caller of this function to leave
            out. With skip=0 the first frame is the caller itself.
        project_root: Project root used for path filtering.
        python_root: Standard library directory used for path filtering.

    Returns:
        Tuple of frames. Empty when the interpreter offers no frame
        introspection.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(skip + 1):
            if frame is None:
                break
            frame = frame.f_back

        frames = []
        while frame is not None:
            frames.append(
                BacktraceFrame(
                    file=filter_path(frame.f_code.co_filename, project_root, python_root),
                    number=frame.f_lineno or 0,  # 0: no line available
                    method=method_name(frame),
                )
            )
            frame = frame.f_back
        return tuple(frames)
    finally:
        del frame


def is_application_file(filename: str) -> bool:
    """Whether filename is a real source file belonging to the application.

    Synthetic code objects (``<string>``, ``<frozen runpy>``), installed
    packages and the interpreter's own installation are excluded.
    """
    if not filename or filename.startswith("<"):
        return False

    path = os.path.abspath(filename)
    parts = path.split(os.sep)
    if any(part in _PACKAGE_DIRS for part in parts):
        return False

    for prefix in _interpreter_prefixes():
        if prefix == os.sep:
            continue
        if path == prefix or path.startswith(prefix.rstrip(os.sep) + os.sep):
            return False
    return True


def select_project_root(filenames: Sequence[str], skip: int = 0) -> str:
    """Pick the project root from a stack of filenames.

    Args:
        filenames: Source files of the call stack, innermost first.
        skip: Innermost entries that belong to the library and may not
            be chosen, although they still count toward the depth check.

    Returns:
        Directory of the outermost application file, or "" when the stack
        has fewer than three frames or no frame qualifies.
    """
    if len(filenames) < 3:
        return ""

    for filename in reversed(filenames[skip:]):
        if is_application_file(filename):
            return os.path.dirname(os.path.abspath(filename))
    return ""


def detect_project_root(skip: int = 0) -> str:
    """Best-effort detection of the entry point's directory.

    Args:
        skip: Frames above the caller that belong to the library, such as
            the client constructor.
    """
    filenames = []
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filenames.append(frame.f_code.co_filename)
            frame = frame.f_back
    finally:
        del frame

    # detector + caller + skipped library frames
    return select_project_root(filenames, skip=skip + 2)
