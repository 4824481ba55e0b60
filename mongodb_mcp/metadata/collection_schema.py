import json
import logging
import re
from urllib.parse import quote, unquote
from typing import List

from mcp import types

from mongodb_mcp.errors import internal_error, invalid_request
from mongodb_mcp.src.tools.base import MongoDBSession
from mongodb_mcp.src.tools.models import SchemaField

logger = logging.getLogger(__name__)

SCHEMA_URI_SCHEME = "mcp-mongodb"
SCHEMA_MIME_TYPE = "application/json"
SCHEMA_URI_PATTERN = re.compile(rf"^{SCHEMA_URI_SCHEME}://([^/]+)/schema$")

def schema_uri(collection_name: str) -> str:
    # Collection names may hold spaces or other characters not allowed in a URL host
    return f"{SCHEMA_URI_SCHEME}://{quote(collection_name, safe='')}/schema"

def infer_schema(document: dict) -> List[SchemaField]:
    """
    Describe a document's top-level fields by the type of their values.

    Best effort: only this one document is looked at, so other documents of
    the same collection may well disagree.
    """
    fields = []
    for key, value in document.items():
        field_type = type(value).__name__
        fields.append(SchemaField(
            field_name=key,
            field_type=field_type,
            description=f"Field {key} of type {field_type}"
        ))
    return fields

class CollectionSchemaResources:
    def __init__(self, session: MongoDBSession):
        self.session = session

    async def list_resources(self) -> List[types.Resource]:
        collections = await self.session.get_database().list_collection_names()

        return [
            types.Resource(
                uri=schema_uri(name),
                mimeType=SCHEMA_MIME_TYPE,
                name=f'"{name}" collection schema',
                description=f"Schema information for the {name} collection"
            )
            for name in collections
        ]

    async def read_resource(self, uri: str) -> str:
        match = SCHEMA_URI_PATTERN.match(str(uri))
        if not match:
            raise invalid_request("Invalid resource URI")

        collection_name = unquote(match.group(1))

        try:
            sample_doc = await self.session.get_collection(collection_name).find_one()
        except Exception as e:
            logger.error(f"Reading schema of '{collection_name}' failed: {e}")
            raise internal_error(f"MongoDB error: {str(e) or 'Unknown error'}")

        if sample_doc is None:
            return json.dumps({"message": "Collection is empty"}, indent=2)

        fields = infer_schema(sample_doc)
        return json.dumps([field.model_dump() for field in fields], indent=2)
