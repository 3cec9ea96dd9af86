"""DTOs for Browser app."""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class TableSchemaDTO:
    columns: List[Dict[str, Any]]
    indexes: List[Dict[str, Any]]


@dataclass(frozen=True)
class SchemaDTO:
    """Every user table with its columns and indexes."""
    tables: List[str]
    schema: Dict[str, TableSchemaDTO] = field(default_factory=dict)


@dataclass(frozen=True)
class StatsDTO:
    table_count: int
    # table name -> row count
    tables: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class TableDataDTO:
    table: str
    row_count: int
    rows: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class QueryResultDTO:
    row_count: int
    rows: List[Dict[str, Any]] = field(default_factory=list)
