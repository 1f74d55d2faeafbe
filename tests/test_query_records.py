"""Tests for SOQL building, relationship validation and query formatting."""

import pytest

from salesforce_mcp.errors import InvalidRelationshipField
from salesforce_mcp.mcp.tools.query_helpers import (
    build_soql_query,
    enhance_query_error,
    format_field_value,
    format_query_results,
)
from salesforce_mcp.utils.validators import validate_relationship_fields


class TestRelationshipValidation:

    @pytest.mark.parametrize("field", ["Account.", ".Name", "Account..Name"])
    def test_empty_segment_rejected(self, field):
        with pytest.raises(InvalidRelationshipField, match="Invalid relationship field format"):
            validate_relationship_fields(["Id", field])

    def test_depth_limit(self):
        validate_relationship_fields(["A.B.C.D.E"])
        with pytest.raises(InvalidRelationshipField, match="exceeds maximum depth of 5 levels"):
            validate_relationship_fields(["A.B.C.D.E.F"])

    def test_malformed_subquery(self):
        with pytest.raises(InvalidRelationshipField, match="Invalid subquery format"):
            validate_relationship_fields(["SELECT Id FROM Contacts"])

    @pytest.mark.parametrize("field", [
        "(SELECT Account..Name FROM Contacts)",
        "(SELECT Id, Owner. FROM Contacts)",
    ])
    def test_subquery_select_list_paths_checked(self, field):
        with pytest.raises(InvalidRelationshipField, match="Invalid relationship field format"):
            validate_relationship_fields([field])

    def test_subquery_select_list_depth(self):
        with pytest.raises(InvalidRelationshipField, match="exceeds maximum depth"):
            validate_relationship_fields(["(SELECT A.B.C.D.E.F FROM Contacts)"])

    def test_valid_fields(self):
        assert validate_relationship_fields([
            "Name",
            "Account.Owner.Name",
            "(SELECT Id, FirstName FROM Contacts)",
        ])


class TestBuildSoqlQuery:

    def test_minimal(self):
        assert build_soql_query("Account", ["Id", "Name"]) == "SELECT Id, Name FROM Account"

    def test_all_clauses(self):
        query = build_soql_query(
            "Contact",
            ["Name", "Account.Name"],
            where_clause="Account.Industry = 'Technology'",
            order_by="Name DESC",
            limit=10,
        )
        assert query == (
            "SELECT Name, Account.Name FROM Contact "
            "WHERE Account.Industry = 'Technology' ORDER BY Name DESC LIMIT 10"
        )

    def test_invalid_field_rejected_before_building(self):
        with pytest.raises(InvalidRelationshipField):
            build_soql_query("Contact", ["Account."])


class TestFormatting:

    def test_nested_path_present(self):
        record = {"Account": {"Owner": {"Name": "Ada"}}}
        assert format_field_value(record, "Account.Owner.Name") == "Account.Owner.Name: Ada"

    def test_nested_path_null_parent(self):
        record = {"Account": None}
        assert format_field_value(record, "Account.Owner.Name") == "Account.Owner.Name: null"

    def test_nested_path_null_intermediate(self):
        record = {"Account": {"Owner": None}}
        assert format_field_value(record, "Account.Owner.Name") == "Account.Owner.Name: null"

    def test_scalar_values(self):
        record = {"Name": "Acme", "Phone": None, "IsDeleted": False, "Employees": 12}
        assert format_field_value(record, "Name") == "Name: Acme"
        assert format_field_value(record, "Phone") == "Phone: null"
        assert format_field_value(record, "Missing") == "Missing: null"
        assert format_field_value(record, "IsDeleted") == "IsDeleted: false"
        assert format_field_value(record, "Employees") == "Employees: 12"

    def test_query_results_with_subquery(self):
        records = [
            {
                "Name": "Acme",
                "Contacts": {"totalSize": 2, "done": True, "records": [{"Id": "1"}, {"Id": "2"}]},
            },
            {"Name": "Globex", "Contacts": None},
        ]
        text = format_query_results(records, ["Name", "(SELECT Id FROM Contacts)"])

        assert text == (
            "Query returned 2 records:\n\n"
            "Record 1:\n"
            "    Name: Acme\n"
            "    Contacts: [2 records]\n\n"
            "Record 2:\n"
            "    Name: Globex\n"
            "    Contacts: [0 records]"
        )


class TestQueryErrorEnhancement:

    def test_relationship_field_checklist(self):
        message = "INVALID_FIELD: No such column 'Acount.Name' on entity 'Contact'"
        enhanced = enhance_query_error(message)

        assert enhanced.startswith('Invalid relationship field "Acount.Name". Please check:')
        assert "4. For custom relationships, ensure you're using '__r' suffix" in enhanced
        assert enhanced.endswith(f"Original error: {message}")

    def test_plain_field_left_alone(self):
        message = "INVALID_FIELD: No such column 'Nmae' on entity 'Account'"
        assert enhance_query_error(message) == message

    def test_other_errors_left_alone(self):
        assert enhance_query_error("MALFORMED_QUERY: unexpected token") == "MALFORMED_QUERY: unexpected token"


class TestQueryRecordsTool:

    def test_query_and_format(self, dispatcher, fake_sf):
        fake_sf.query_result = {
            "totalSize": 1,
            "done": True,
            "records": [{"Name": "Grace", "Account": {"Name": "Acme"}}],
        }

        envelope = dispatcher.invoke(
            "query_records",
            {"objectName": "Contact", "fields": ["Name", "Account.Name"], "whereClause": "Name != null"},
        )

        assert not envelope.is_error
        assert fake_sf.calls == [("query", "SELECT Name, Account.Name FROM Contact WHERE Name != null")]
        assert envelope.text == (
            "Query returned 1 records:\n\n"
            "Record 1:\n"
            "    Name: Grace\n"
            "    Account.Name: Acme"
        )

    def test_invalid_relationship_field_makes_no_remote_call(self, dispatcher, fake_sf):
        envelope = dispatcher.invoke("query_records", {"objectName": "Contact", "fields": ["Account."]})

        assert envelope.is_error
        assert 'Invalid relationship field format: "Account."' in envelope.text
        assert fake_sf.calls == []

    def test_remote_failure(self, dispatcher, fake_sf):
        fake_sf.query_error = RuntimeError("INVALID_FIELD: No such column 'Acount.Name' on entity 'Contact'")

        envelope = dispatcher.invoke("query_records", {"objectName": "Contact", "fields": ["Acount.Name"]})

        assert envelope.is_error
        assert envelope.text.startswith('Error: Error executing query: Invalid relationship field "Acount.Name"')
