"""Labels, limits and thresholds shared by roadmap reports."""

BLOCKED_LABELS: tuple[str, ...] = (
    "do-not-merge",
    "need-issue",
    "need-rfc",
    "need-customer-feedback",
    "on-hold",
    "revisit-in-3-months",
)

FEATURE_REQUEST_LABEL = "feature-request"
TRIAGE_LABEL = "triage"
BUG_LABEL = "bug"
PENDING_RELEASE_LABEL = "pending-release"
REPORT_ROADMAP_LABEL = "report-roadmap"

# Open milestones whose title contains this marker are treated as the priority one
PRIORITY_MILESTONE_MARKER = "(priority)"

TOP_FEATURE_REQUESTS_LIMIT = 3
TOP_MOST_COMMENTED_LIMIT = 3
TOP_OLDEST_ISSUES_LIMIT = 3
TOP_LONG_RUNNING_PR_LIMIT = 3
TOP_UNTRIAGED_LIMIT = 3
TOP_BUG_ISSUES_LIMIT = 3
PRIORITY_MILESTONE_PREVIEW = 3
MILESTONE_ISSUES_LIMIT = 999

LONG_RUNNING_WITHOUT_UPDATE_THRESHOLD = 7
