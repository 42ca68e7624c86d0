"""Parameterized query descriptions handed to the document store."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class QueryParameter(BaseModel):
    """A named value bound into a query template."""

    name: str = Field(..., description="Parameter name including the leading '@'")
    value: Any = Field(..., description="Bound value")

    model_config = ConfigDict(frozen=True)


class QuerySpec(BaseModel):
    """Query template plus its bound parameters (Cosmos SQL query spec)."""

    query: str = Field(..., description="Cosmos SQL query template")
    parameters: list[QueryParameter] = Field(default_factory=list, description="Bound parameters")

    model_config = ConfigDict(frozen=True)

    def sdk_parameters(self) -> list[dict[str, Any]]:
        """Parameters in the shape the Cosmos SDK expects."""
        return [{"name": p.name, "value": p.value} for p in self.parameters]


class QueryOptions(BaseModel):
    """Execution options for a query.

    Cross-partition (fan-out) queries scan every partition. When fan-out is
    disabled the query is scoped to ``partition_key``.
    """

    enable_cross_partition_query: bool = True
    partition_key: str | None = None

    model_config = ConfigDict(frozen=True)
