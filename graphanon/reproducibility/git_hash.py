"""Git provenance capture so each result can be traced to the code that produced it."""

import subprocess


def _git_succeeds(*args: str) -> bool:
    try:
        subprocess.check_output(["git", *args], stderr=subprocess.DEVNULL)
    except subprocess.CalledProcessError:
        return False
    return True


def get_git_hash() -> str:
    """Short SHA of HEAD, suffixed with '-dirty' when the tree has changes.

    Returns:
        "a3f9c1d", "a3f9c1d-dirty", or "unknown" outside a git checkout or
        when git is not installed.
    """
    try:
        sha = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"],
            stderr=subprocess.DEVNULL,
        ).decode().strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return "unknown"

    clean = _git_succeeds("diff", "--quiet") and _git_succeeds(
        "diff", "--quiet", "--cached"
    )
    return sha if clean else f"{sha}-dirty"
