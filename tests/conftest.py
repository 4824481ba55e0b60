from typing import Any, Dict, List, Optional

import pytest

from mongodb_mcp.src.tools.base import MongoDBSession


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self.documents = documents

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self.documents)


class FakeCollection:
    """Stands in for pymongo's AsyncCollection and records what it was asked"""

    def __init__(self, name: str, documents: Optional[List[Dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.name = name
        self.documents = documents or []
        self.error = error
        self.aggregate_calls = []

    async def aggregate(self, pipeline, **kwargs):
        self.aggregate_calls.append((pipeline, kwargs))
        if self.error:
            raise self.error
        return FakeCursor(self.documents)

    async def find_one(self):
        if self.error:
            raise self.error
        return self.documents[0] if self.documents else None


class FakeDatabase:
    name = "test"

    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}
        self.commands = []
        self.command_result: Dict[str, Any] = {"ok": 1.0}
        self.command_error: Optional[Exception] = None

    def add_collection(self, name: str, documents=None, error=None) -> FakeCollection:
        self.collections[name] = FakeCollection(name, documents, error)
        return self.collections[name]

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.add_collection(name)
        return self.collections[name]

    async def list_collection_names(self) -> List[str]:
        return list(self.collections)

    async def command(self, command):
        self.commands.append(command)
        if self.command_error:
            raise self.command_error
        return self.command_result


@pytest.fixture
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def session(database) -> MongoDBSession:
    return MongoDBSession(database=database)
