"""Pytest configuration and fixtures."""

import pytest

from salesforce_mcp.mcp.dispatcher import Dispatcher


class FakeSObject:
    def __init__(self, capability, object_name):
        self.capability = capability
        self.object_name = object_name

    def _results(self, operation, payload):
        self.capability.calls.append((operation, self.object_name, payload))
        if self.capability.dml_result is not None:
            return self.capability.dml_result
        return [{"id": f"001{i:015d}", "success": True, "errors": []} for i, _ in enumerate(payload)]

    def create(self, records):
        return self._results("create", records)

    def update(self, records):
        return self._results("update", records)

    def destroy(self, ids):
        return self._results("destroy", ids)

    def upsert(self, records, external_id_field):
        self.capability.upsert_external_ids.append(external_id_field)
        return self._results("upsert", records)


class FakeMetadata:
    def __init__(self, capability):
        self.capability = capability
        self.existing = {}
        self.save_result = None
        self.error = None

    def _save(self, operation, metadata_type, document):
        self.capability.calls.append((f"metadata.{operation}", metadata_type, document))
        if self.error:
            raise self.error
        if self.save_result is not None:
            return self.save_result
        return {"fullName": document["fullName"], "success": True}

    def create(self, metadata_type, document):
        return self._save("create", metadata_type, document)

    def read(self, metadata_type, full_names):
        self.capability.calls.append(("metadata.read", metadata_type, list(full_names)))
        return self.existing.get(full_names[0])

    def update(self, metadata_type, document):
        return self._save("update", metadata_type, document)


class FakeCapability:
    """In-memory SalesforceCapability recording every call."""

    def __init__(self):
        self.calls = []
        self.upsert_external_ids = []
        self.describe_results = {}
        self.global_describe = {"sobjects": []}
        self.query_result = {"totalSize": 0, "done": True, "records": []}
        self.search_result = {"searchRecords": []}
        self.dml_result = None
        self.query_error = None
        self.search_error = None
        self.metadata = FakeMetadata(self)

    def describe(self, object_name):
        self.calls.append(("describe", object_name))
        return self.describe_results[object_name]

    def describe_global(self):
        self.calls.append(("describe_global",))
        return self.global_describe

    def query(self, soql):
        self.calls.append(("query", soql))
        if self.query_error:
            raise self.query_error
        return self.query_result

    def search(self, sosl):
        self.calls.append(("search", sosl))
        if self.search_error:
            raise self.search_error
        return self.search_result

    def sobject(self, object_name):
        return FakeSObject(self, object_name)


@pytest.fixture
def fake_sf():
    return FakeCapability()


@pytest.fixture
def dispatcher(fake_sf):
    return Dispatcher(connection_factory=lambda: fake_sf)
