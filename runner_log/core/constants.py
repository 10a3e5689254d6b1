# Workflow-run listing page size (GitHub maximum)
RUNS_PAGE_SIZE = 100

# Runner listing page size; one page is normally enough
RUNNERS_PAGE_SIZE = 100

# Raw-job accumulation target when the caller gives no runner filter
OVERFETCH_MULTIPLIER = 10
OVERFETCH_CAP = 1000

GITHUB_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
    "User-Agent": "runner-log",
}
