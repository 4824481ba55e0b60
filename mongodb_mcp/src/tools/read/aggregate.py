from typing import Any, Dict, List
from ...tools.base import MongoDBToolBase
from ...tools.models import AggregateArgs
from ...tools.policy import safe_aggregate

class AggregateTool(MongoDBToolBase):
    args_model = AggregateArgs
    invalid_arguments_message = "Invalid arguments: expected collection and pipeline parameters"

    @property
    def name(self) -> str:
        return "aggregate"

    @property
    def description(self) -> str:
        return "Run a MongoDB aggregation pipeline"

    @property
    def error_label(self) -> str:
        return "Aggregation"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "collection": {
                    "type": "string",
                    "description": "Name of the collection to query"
                },
                "pipeline": {
                    "type": "array",
                    "items": {"type": "object"},
                    "description": "MongoDB aggregation pipeline stages (e.g., $match, $group, $sort)"
                },
                "options": {
                    "type": "object",
                    "description": "Optional aggregation options",
                    "properties": {
                        "allowDiskUse": {
                            "type": "boolean",
                            "description": "Allow writing to temporary files"
                        },
                        "maxTimeMS": {
                            "type": "number",
                            "description": "Maximum execution time in milliseconds"
                        },
                        "comment": {
                            "type": "string",
                            "description": "Optional comment to help trace operations"
                        }
                    }
                }
            },
            "required": ["collection", "pipeline"]
        }

    @property
    def examples(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": "Count documents by status",
                "arguments": {
                    "collection": "orders",
                    "pipeline": [
                        {"$group": {"_id": "$status", "count": {"$sum": 1}}},
                        {"$sort": {"count": -1}}
                    ]
                }
            }
        ]

    async def run(self, args: AggregateArgs) -> List[Dict[str, Any]]:
        pipeline, options = safe_aggregate(args.pipeline, args.options)

        mongo_collection = self.session.get_collection(args.collection)
        cursor = await mongo_collection.aggregate(pipeline, **options)
        return await cursor.to_list()
