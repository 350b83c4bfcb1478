"""Pydantic models that define the request contract of the HTTP API."""
from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, Field


class ExecutionRequest(BaseModel):
    """Body of ``POST /api/execute`` and ``POST /api/prove``."""

    program: str = Field(description="Miden assembly source text")
    inputs: Optional[Any] = Field(
        default=None,
        description='Initial operand stack, e.g. {"operand_stack": ["10", "20"]}',
    )

    def inputs_json(self) -> Optional[str]:
        if self.inputs is None:
            return None
        return json.dumps(self.inputs)


__all__ = ["ExecutionRequest"]
