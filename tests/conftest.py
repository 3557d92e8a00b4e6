import mongomock
import pytest

from fakes import FakeClient, FakeCollection, FakeDatabase


@pytest.fixture
def mongo_client():
    client = mongomock.MongoClient()
    yield client
    client.close()


@pytest.fixture
def collection(mongo_client):
    return mongo_client["test"]["people"]


@pytest.fixture
def shop_client():
    return FakeClient([
        FakeDatabase("admin", {"system.users": FakeCollection(2, 1)}),
        FakeDatabase("shop", {
            "users": FakeCollection(document_count=3, index_count=1),
            "orders": FakeCollection(document_count=10, index_count=2),
        }),
        FakeDatabase("local", {"startup_log": FakeCollection(1, 1)}),
    ])
