from typing import Any, Dict, List
from ...tools.base import MongoDBToolBase
from ...tools.models import ExplainArgs
from ...tools.policy import explain_verbosity

class ExplainTool(MongoDBToolBase):
    args_model = ExplainArgs
    invalid_arguments_message = "Invalid arguments: expected collection and pipeline parameters"

    @property
    def name(self) -> str:
        return "explain"

    @property
    def description(self) -> str:
        return "Get the execution plan for an aggregation pipeline"

    @property
    def error_label(self) -> str:
        return "Explain"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "collection": {
                    "type": "string",
                    "description": "Name of the collection to analyze"
                },
                "pipeline": {
                    "type": "array",
                    "items": {"type": "object"},
                    "description": "MongoDB aggregation pipeline stages to analyze"
                },
                "verbosity": {
                    "type": "string",
                    "enum": ["queryPlanner", "executionStats", "allPlansExecution"],
                    "default": "queryPlanner",
                    "description": "Level of detail in the execution plan"
                }
            },
            "required": ["collection", "pipeline"]
        }

    @property
    def examples(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": "Analyze index usage",
                "arguments": {
                    "collection": "users",
                    "pipeline": [
                        {"$match": {"status": "active"}},
                        {"$sort": {"lastLogin": -1}}
                    ],
                    "verbosity": "executionStats"
                }
            }
        ]

    async def run(self, args: ExplainArgs) -> Dict[str, Any]:
        # The plan comes back from the explain command; no data is read
        command = {
            "explain": {
                "aggregate": args.collection,
                "pipeline": args.pipeline,
                "cursor": {}
            },
            "verbosity": explain_verbosity(args.verbosity)
        }
        return await self.session.get_database().command(command)
