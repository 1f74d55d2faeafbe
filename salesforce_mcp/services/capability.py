"""The Salesforce operations tool handlers depend on

Handlers only talk to ``SalesforceCapability``; ``SimpleSalesforceCapability``
adapts a logged-in ``simple_salesforce.Salesforce`` session to it.
"""
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from simple_salesforce import Salesforce
from zeep.helpers import serialize_object

logger = logging.getLogger(__name__)

# sObject Collections accept at most 200 records per request
COLLECTION_CHUNK_SIZE = 200

OperationResult = Dict[str, Any]
MetadataDocument = Dict[str, Any]


class SObjectOperations(Protocol):
    def create(self, records: List[Dict[str, Any]]) -> List[OperationResult]: ...

    def update(self, records: List[Dict[str, Any]]) -> List[OperationResult]: ...

    def destroy(self, ids: List[str]) -> List[OperationResult]: ...

    def upsert(self, records: List[Dict[str, Any]], external_id_field: str) -> List[OperationResult]: ...


class MetadataOperations(Protocol):
    def create(self, metadata_type: str, document: MetadataDocument) -> Union[OperationResult, List[OperationResult]]: ...

    def read(self, metadata_type: str, full_names: Sequence[str]) -> Optional[Union[MetadataDocument, List[MetadataDocument]]]: ...

    def update(self, metadata_type: str, document: MetadataDocument) -> Union[OperationResult, List[OperationResult]]: ...


class SalesforceCapability(Protocol):
    """Everything a tool handler may ask of the remote org"""

    metadata: MetadataOperations

    def describe(self, object_name: str) -> Dict[str, Any]: ...

    def describe_global(self) -> Dict[str, Any]: ...

    def query(self, soql: str) -> Dict[str, Any]: ...

    def search(self, sosl: str) -> Dict[str, Any]: ...

    def sobject(self, object_name: str) -> SObjectOperations: ...


def _chunks(items: List[Any], size: int = COLLECTION_CHUNK_SIZE):
    for start in range(0, len(items), size):
        yield items[start:start + size]


class SimpleSalesforceSObject:
    """Record mutations through the sObject Collections REST resource.

    ``allOrNone`` is always false so every submitted record gets its own
    result, which is what the DML formatter reports on.
    """

    def __init__(self, sf: Salesforce, object_name: str):
        self._sf = sf
        self.object_name = object_name

    def _payload(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "allOrNone": False,
            "records": [{"attributes": {"type": self.object_name}, **record} for record in records],
        }

    def _send(self, path: str, method: str, records: List[Dict[str, Any]]) -> List[OperationResult]:
        results: List[OperationResult] = []
        for chunk in _chunks(records):
            response = self._sf.restful(path, method=method, json=self._payload(chunk))
            results.extend(response or [])
        return results

    def create(self, records):
        return self._send("composite/sobjects", "POST", records)

    def update(self, records):
        return self._send("composite/sobjects", "PATCH", records)

    def upsert(self, records, external_id_field):
        return self._send(f"composite/sobjects/{self.object_name}/{external_id_field}", "PATCH", records)

    def destroy(self, ids):
        results: List[OperationResult] = []
        for chunk in _chunks(ids):
            response = self._sf.restful(
                "composite/sobjects",
                method="DELETE",
                params={"ids": ",".join(chunk), "allOrNone": "false"},
            )
            results.extend(response or [])
        return results


class SimpleSalesforceMetadata:
    """Metadata API access through ``Salesforce.mdapi`` (SOAP via zeep).

    simple_salesforce raises on unsuccessful saves, so a call that returns is
    reported as a successful save result.
    """

    def __init__(self, sf: Salesforce):
        self._sf = sf

    def _type(self, metadata_type: str):
        return getattr(self._sf.mdapi, metadata_type)

    def create(self, metadata_type, document):
        md_type = self._type(metadata_type)
        md_type.create(md_type(**document))
        return {"fullName": document.get("fullName"), "success": True}

    def read(self, metadata_type, full_names):
        response = self._type(metadata_type).read(list(full_names))
        items = response if isinstance(response, list) else [response]
        documents = []
        for item in items:
            document = serialize_object(item, dict) if item is not None else None
            # readMetadata answers unknown names with an empty record
            if document and document.get("fullName"):
                documents.append(document)
        if not documents:
            return None
        return documents[0] if len(documents) == 1 else documents

    def update(self, metadata_type, document):
        md_type = self._type(metadata_type)
        md_type.update(md_type(**document))
        return {"fullName": document.get("fullName"), "success": True}


class SimpleSalesforceCapability:
    """SalesforceCapability backed by a simple_salesforce session"""

    def __init__(self, sf: Salesforce):
        self._sf = sf
        self.metadata = SimpleSalesforceMetadata(sf)

    @property
    def instance_url(self) -> str:
        return f"https://{self._sf.sf_instance}"

    def describe(self, object_name: str) -> Dict[str, Any]:
        return getattr(self._sf, object_name).describe()

    def describe_global(self) -> Dict[str, Any]:
        return self._sf.describe()

    def query(self, soql: str) -> Dict[str, Any]:
        logger.debug("SOQL: %s", soql)
        return self._sf.query(soql)

    def search(self, sosl: str) -> Dict[str, Any]:
        logger.debug("SOSL: %s", sosl)
        result = self._sf.search(sosl)
        # older API versions answer with a bare list of records
        if isinstance(result, list):
            return {"searchRecords": result}
        return result or {"searchRecords": []}

    def sobject(self, object_name: str) -> SimpleSalesforceSObject:
        return SimpleSalesforceSObject(self._sf, object_name)
