"""GitHub search query building."""


def build_tracking_query(
    title: str,
    owner: str,
    repo: str,
    label: str | None = None,
    state: str = "open",
) -> str:
    """Build the search query that re-finds a report's tracking issue.

    Args:
        title: Canonical report title, matched against issue titles
        owner: Repository owner
        repo: Repository name
        label: Optional tracking label to narrow the match
        state: Issue state (open, closed, all)

    Returns:
        GitHub search query string

    Example:
        >>> build_tracking_query(
        ...     "Roadmap update reminder - May", "o", "r", "report-roadmap"
        ... )
        "Roadmap update reminder - May is:issue in:title state:open " \\
        "label:report-roadmap repo:o/r"
    """
    query_parts = [title, "is:issue", "in:title"]

    if state != "all":
        query_parts.append(f"state:{state}")

    if label:
        query_parts.append(f"label:{label}")

    query_parts.append(f"repo:{owner}/{repo}")

    return " ".join(query_parts)
