import logging
from enum import Enum
from typing import Any, Dict, List

from mcp import types

from ...errors import method_not_found
from .base import MongoDBSession, MongoDBToolBase
from .read.aggregate import AggregateTool
from .read.explain import ExplainTool
from .read.sample import SampleTool

logger = logging.getLogger(__name__)

class ToolName(str, Enum):
    AGGREGATE = "aggregate"
    EXPLAIN = "explain"
    SAMPLE = "sample"

class ToolDispatcher:
    """
    Routes a tool call by name to exactly one tool.

    Two kinds of failure leave this class. A name that is not a ``ToolName``
    raises ``McpError`` (method not found), since that is a caller bug. Bad
    arguments or a failing query come back as a normal result with
    ``isError=True``.
    """

    def __init__(self, session: MongoDBSession):
        self.tools: Dict[ToolName, MongoDBToolBase] = {
            ToolName.AGGREGATE: AggregateTool(session),
            ToolName.EXPLAIN: ExplainTool(session),
            ToolName.SAMPLE: SampleTool(session),
        }

    def list_tools(self) -> List[types.Tool]:
        return [self.tools[name].to_tool() for name in ToolName]

    async def call_tool(self, name: str, arguments: Any) -> types.CallToolResult:
        try:
            tool_name = ToolName(name)
        except ValueError:
            raise method_not_found(f"Unknown tool: {name}") from None

        logger.info(f"Calling tool '{tool_name.value}'")
        return await self.tools[tool_name].execute(arguments)
