from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class QueryResult:
    """Uniform result of DatabaseBackend.execute()."""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    # Only set after an INSERT
    last_insert_id: Optional[int] = None
