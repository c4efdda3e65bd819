"""Turn a raw handle or profile URL into a bare GitHub handle."""

GITHUB_HOST_MARKER = "github.com"


def extract_username(raw: str) -> str:
    """
    Extract the GitHub handle from user input.

    Args:
        raw: Bare handle ("octocat") or profile URL
            ("https://github.com/octocat/", "github.com/octocat/repo")

    Returns:
        The handle, or "" when the input names the host but no path segment
        follows it. Input without the host marker is returned trimmed but
        otherwise unchanged.

    Example:
        >>> extract_username("https://github.com/octocat/")
        'octocat'
        >>> extract_username("  octocat ")
        'octocat'
        >>> extract_username("https://github.com")
        ''
    """
    trimmed = raw.strip()
    if GITHUB_HOST_MARKER not in trimmed:
        return trimmed

    parts = trimmed.split(f"{GITHUB_HOST_MARKER}/")
    if len(parts) < 2:
        return ""
    return parts[1].split("/")[0]
