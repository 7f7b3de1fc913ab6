"""GitHub Actions job summary output."""

from pathlib import Path


def write_job_summary(path: str | Path, heading: str, link_text: str, url: str) -> None:
    """Append a heading and a link to the job summary file.

    Args:
        path: File named by ``GITHUB_STEP_SUMMARY``
        heading: Summary heading, usually the report title
        link_text: Text of the link to the published issue
        url: Published issue URL
    """
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"<h1>{heading}</h1>\n")
        f.write(f'<a href="{url}">{link_text}</a>\n')
