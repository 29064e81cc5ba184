from __future__ import annotations

# GitHub API requests
HTTP_TIMEOUT_SECONDS = 30.0

# Read-after-write polling after cleanup mutations (delete release, move
# release, force-move ref, delete ref). Delays grow linearly per attempt.
CONSISTENCY_POLL_ATTEMPTS = 6
CONSISTENCY_POLL_DELAY_SECONDS = 1.0
