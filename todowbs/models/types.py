# todowbs type definitions
# Rev 0.1.0

from __future__ import annotations

# status is free-form text; the UI offers pending / in_progress / completed / cancelled
DEFAULT_TASK_STATUS = "pending"
DEFAULT_PRIORITY = 0
