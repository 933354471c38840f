"""Locate Cucumber JSON report files in a directory."""

import glob
import logging
import stat
from pathlib import Path

from cucumber_report_gate.errors import DiscoveryError

log = logging.getLogger(__name__)

READABLE_BITS = stat.S_IRUSR | stat.S_IROTH


def locate_files(
    directory: Path,
    include_pattern: str,
    exclude_pattern: str | None = None,
) -> set[Path]:
    """Resolve include/exclude glob patterns to readable report files.

    Args:
        directory: Base directory the patterns are relative to
        include_pattern: Glob selecting candidate files (``**`` is recursive)
        exclude_pattern: Optional glob removing candidates from the selection

    Returns:
        Unordered set of readable report file paths

    Raises:
        DiscoveryError: If nothing matches or no match is readable

    """
    matches = expand_pattern(directory, include_pattern)
    log.info("Found %d files matching the pattern: %s", len(matches), include_pattern)

    if not matches:
        raise DiscoveryError(
            "no files found matching the report filename pattern: "
            f"{include_pattern} (directory: {directory})"
        )

    if exclude_pattern:
        excluded = matches & expand_pattern(directory, exclude_pattern)
        if excluded:
            log.info(
                "Excluding %d files matching the pattern: %s",
                len(excluded),
                exclude_pattern,
            )
        matches -= excluded

    readable = {path for path in matches if is_readable_report(path)}
    log.info("Number of readable files: %d", len(readable))

    if not readable:
        raise DiscoveryError(
            "no readable files found matching the report filename pattern: "
            f"{include_pattern} (directory: {directory})"
        )

    return readable


def expand_pattern(directory: Path, pattern: str) -> set[Path]:
    """Expand a glob pattern relative to ``directory``.

    The directory itself is never treated as a pattern, and hidden files
    match like any other file.
    """
    matches = glob.glob(
        pattern, root_dir=directory, recursive=True, include_hidden=True
    )
    return {Path(directory) / match for match in matches}


def is_readable_report(path: Path) -> bool:
    """Check that a path is a regular file with a read permission bit set."""
    try:
        mode = path.stat().st_mode
    except OSError as e:
        log.warning("Error accessing file: %s. Error: %s", path, e)
        return False

    if not stat.S_ISREG(mode):
        log.debug("Skipping non-file match: %s", path)
        return False

    if not mode & READABLE_BITS:
        log.warning("File found but not readable: %s", path)
        return False

    return True
