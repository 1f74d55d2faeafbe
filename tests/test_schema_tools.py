"""Tests for search_objects and describe_object."""

import pytest

GLOBAL_DESCRIBE = {
    "sobjects": [
        {"name": "Account", "label": "Account", "custom": False},
        {"name": "AccountHistory", "label": "Account History", "custom": False},
        {"name": "AccountCoverage__c", "label": "Account Coverage", "custom": True},
        {"name": "WorkOrder", "label": "Work Order", "custom": False},
    ]
}

ACCOUNT_DESCRIBE = {
    "name": "Account",
    "label": "Account",
    "custom": False,
    "fields": [
        {"name": "Name", "label": "Account Name", "type": "string", "length": 255, "nillable": False},
        {
            "name": "ParentId",
            "label": "Parent Account ID",
            "type": "reference",
            "length": 18,
            "nillable": True,
            "referenceTo": ["Account"],
        },
        {
            "name": "Rating",
            "label": "Account Rating",
            "type": "picklist",
            "length": 0,
            "nillable": True,
            "picklistValues": [{"value": "Hot"}, {"value": "Warm"}, {"value": "Cold"}],
        },
    ],
}


@pytest.fixture
def org(fake_sf):
    fake_sf.global_describe = GLOBAL_DESCRIBE
    fake_sf.describe_results["Account"] = ACCOUNT_DESCRIBE
    return fake_sf


class TestSearchObjects:

    def test_matches_name_or_label(self, dispatcher, org):
        envelope = dispatcher.invoke("search_objects", {"searchPattern": "Account Coverage"})

        assert envelope.text == (
            "Found 1 matching objects:\n\n"
            "AccountCoverage__c (Custom)\n"
            "  Label: Account Coverage"
        )

    def test_case_insensitive(self, dispatcher, org):
        envelope = dispatcher.invoke("search_objects", {"searchPattern": "ORDER"})

        assert envelope.text.startswith("Found 1 matching objects:")
        assert "WorkOrder\n  Label: Work Order" in envelope.text

    def test_every_term_must_match(self, dispatcher, org):
        envelope = dispatcher.invoke("search_objects", {"searchPattern": "account"})
        assert envelope.text.startswith("Found 3 matching objects:")

    def test_no_match(self, dispatcher, org):
        envelope = dispatcher.invoke("search_objects", {"searchPattern": "Zebra"})

        assert not envelope.is_error
        assert envelope.text == 'No Salesforce objects found matching "Zebra".'


class TestDescribeObject:

    def test_describe(self, dispatcher, org):
        envelope = dispatcher.invoke("describe_object", {"objectName": "Account"})

        assert org.calls == [("describe", "Account")]
        assert envelope.text == (
            "Object: Account (Account)\n"
            "Fields:\n"
            "  - Name (Account Name)\n"
            "    Type: string, Length: 255\n"
            "    Required: true\n"
            "  - ParentId (Parent Account ID)\n"
            "    Type: reference, Length: 18\n"
            "    Required: false\n"
            "    References: Account\n"
            "  - Rating (Account Rating)\n"
            "    Type: picklist\n"
            "    Required: false\n"
            "    Picklist Values: Hot, Warm, Cold"
        )

    def test_custom_object_marker(self, dispatcher, fake_sf):
        fake_sf.describe_results["Ticket__c"] = {"name": "Ticket__c", "label": "Ticket", "custom": True, "fields": []}

        envelope = dispatcher.invoke("describe_object", {"objectName": "Ticket__c"})

        assert envelope.text == "Object: Ticket__c (Ticket) (Custom Object)\nFields:"

    def test_repeatable(self, dispatcher, org):
        first = dispatcher.invoke("describe_object", {"objectName": "Account"})
        second = dispatcher.invoke("describe_object", {"objectName": "Account"})
        assert first.text == second.text
