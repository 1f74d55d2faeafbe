"""Tests for the dml_records tool and DML result formatting."""

from salesforce_mcp.mcp.tools.formatters import format_dml_results


class TestFormatDmlResults:

    def test_all_successful(self):
        text = format_dml_results("insert", [{"id": "001A", "success": True, "errors": []}] * 2)

        assert text == (
            "INSERT operation completed.\n"
            "Processed 2 records:\n"
            "- Successful: 2\n"
            "- Failed: 0"
        )

    def test_partial_failure(self):
        result = [
            {"id": "001A", "success": True, "errors": []},
            {
                "success": False,
                "errors": [{
                    "message": "Required fields are missing: [LastName]",
                    "statusCode": "REQUIRED_FIELD_MISSING",
                    "fields": ["LastName"],
                }],
            },
        ]

        assert format_dml_results("update", result) == (
            "UPDATE operation completed.\n"
            "Processed 2 records:\n"
            "- Successful: 1\n"
            "- Failed: 1\n"
            "\n"
            "Errors:\n"
            "Record 2:\n"
            "  - Required fields are missing: [LastName] [REQUIRED_FIELD_MISSING]\n"
            "    Fields: LastName"
        )

    def test_single_error_object(self):
        result = {"success": False, "errors": {"message": "entity is deleted", "statusCode": "ENTITY_IS_DELETED"}}

        text = format_dml_results("delete", result)

        assert "Processed 1 records:" in text
        assert text.endswith("Record 1:\n  - entity is deleted [ENTITY_IS_DELETED]")


class TestDmlRecordsTool:

    def test_insert(self, dispatcher, fake_sf):
        records = [{"Name": "Acme"}, {"Name": "Globex"}]

        envelope = dispatcher.invoke("dml_records", {"operation": "insert", "objectName": "Account", "records": records})

        assert not envelope.is_error
        assert fake_sf.calls == [("create", "Account", records)]
        assert "- Successful: 2" in envelope.text

    def test_update(self, dispatcher, fake_sf):
        records = [{"Id": "500A", "Status": "Closed"}]

        dispatcher.invoke("dml_records", {"operation": "update", "objectName": "Case", "records": records})

        assert fake_sf.calls == [("update", "Case", records)]

    def test_delete_sends_ids(self, dispatcher, fake_sf):
        envelope = dispatcher.invoke("dml_records", {
            "operation": "delete",
            "objectName": "Account",
            "records": [{"Id": "001A"}, {"Id": "001B"}],
        })

        assert envelope.text.startswith("DELETE operation completed.")
        assert fake_sf.calls == [("destroy", "Account", ["001A", "001B"])]

    def test_delete_requires_ids(self, dispatcher, fake_sf):
        envelope = dispatcher.invoke("dml_records", {
            "operation": "delete",
            "objectName": "Account",
            "records": [{"Id": "001A"}, {"Name": "no id"}],
        })

        assert envelope.is_error
        assert "missing on record 2" in envelope.text
        assert fake_sf.calls == []

    def test_upsert(self, dispatcher, fake_sf):
        records = [{"External_Key__c": "K-1", "Name": "Acme"}]

        envelope = dispatcher.invoke("dml_records", {
            "operation": "upsert",
            "objectName": "Account",
            "records": records,
            "externalIdField": "External_Key__c",
        })

        assert not envelope.is_error
        assert fake_sf.upsert_external_ids == ["External_Key__c"]
        assert envelope.text.startswith("UPSERT operation completed.")

    def test_record_failures_are_not_call_errors(self, dispatcher, fake_sf):
        fake_sf.dml_result = [
            {"success": False, "errors": [{"message": "duplicate value found", "statusCode": "DUPLICATE_VALUE"}]},
        ]

        envelope = dispatcher.invoke("dml_records", {
            "operation": "insert",
            "objectName": "Account",
            "records": [{"Name": "Acme"}],
        })

        assert not envelope.is_error
        assert "- Failed: 1" in envelope.text
        assert "duplicate value found [DUPLICATE_VALUE]" in envelope.text
