from typing import Any, Dict, List
from ...tools.base import MongoDBToolBase
from ...tools.models import SampleArgs
from ...tools.policy import safe_sample_size, MAX_SAMPLE_SIZE, MIN_SAMPLE_SIZE, DEFAULT_SAMPLE_SIZE

class SampleTool(MongoDBToolBase):
    args_model = SampleArgs

    @property
    def name(self) -> str:
        return "sample"

    @property
    def description(self) -> str:
        return "Get random sample documents from a collection"

    @property
    def error_label(self) -> str:
        return "Sample"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "collection": {
                    "type": "string",
                    "description": "Name of the collection to sample from"
                },
                "count": {
                    "type": "number",
                    "description": f"Number of documents to sample (default: {DEFAULT_SAMPLE_SIZE}, max: {MAX_SAMPLE_SIZE})",
                    "minimum": MIN_SAMPLE_SIZE,
                    "maximum": MAX_SAMPLE_SIZE,
                    "default": DEFAULT_SAMPLE_SIZE
                }
            },
            "required": ["collection"]
        }

    @property
    def examples(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": "Get 5 random documents",
                "arguments": {"collection": "listings", "count": 5}
            }
        ]

    async def run(self, args: SampleArgs) -> List[Dict[str, Any]]:
        pipeline = [{"$sample": {"size": safe_sample_size(args.count)}}]

        mongo_collection = self.session.get_collection(args.collection)
        cursor = await mongo_collection.aggregate(pipeline)
        return await cursor.to_list()
