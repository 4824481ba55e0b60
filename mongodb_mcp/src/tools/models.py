from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

Verbosity = Literal["queryPlanner", "executionStats", "allPlansExecution"]

class ToolArguments(BaseModel):
    """Shape shared by every tool: strict types, unknown keys ignored"""
    model_config = ConfigDict(strict=True, extra="ignore")

    collection: str = Field(min_length=1)

class AggregateArgs(ToolArguments):
    pipeline: List[Dict[str, Any]]
    options: Optional[Dict[str, Any]] = None

class ExplainArgs(ToolArguments):
    pipeline: List[Dict[str, Any]]
    verbosity: Verbosity = "queryPlanner"

class SampleArgs(ToolArguments):
    count: Optional[float] = Field(default=None, gt=0, le=10)

class SchemaField(BaseModel):
    field_name: str
    field_type: str
    description: str

ArgsT = TypeVar("ArgsT", bound=ToolArguments)

@dataclass(frozen=True)
class Valid(Generic[ArgsT]):
    args: ArgsT

@dataclass(frozen=True)
class Invalid:
    reason: str

ValidationResult = Union[Valid[ArgsT], Invalid]

def validate_arguments(model: Type[ArgsT], arguments: Any) -> ValidationResult:
    """
    Check untyped tool input against a declared argument shape.

    Only structure is checked. Whether the collection exists or the pipeline
    stages make sense is left to the database.
    """
    if not isinstance(arguments, dict):
        return Invalid("arguments must be an object")

    try:
        return Valid(model.model_validate(arguments))
    except ValidationError as e:
        reasons = [
            f"{'.'.join(str(part) for part in error['loc']) or 'arguments'}: {error['msg']}"
            for error in e.errors()
        ]
        return Invalid("; ".join(reasons))
