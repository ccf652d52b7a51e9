import asyncio
import json

import pytest

from core.errors import InvalidArguments, RemoteCallFailed, UnknownOperation

from tests.conftest import text_of


def test_unknown_operation_never_reaches_affinity(call, affinity):
    with pytest.raises(UnknownOperation) as excinfo:
        call("affinity_delete_everything", {})
    assert "affinity_delete_everything" in str(excinfo.value)
    assert excinfo.value.kind == "unknown_operation"
    assert affinity.requests == []


def test_missing_required_field_fails_before_remote_call(call, affinity):
    affinity.on("POST", "/persons", {"id": 1, "first_name": "Ada", "last_name": "Lovelace"})
    with pytest.raises(InvalidArguments) as excinfo:
        call("affinity_create_person", {"first_name": "Ada"})
    assert "last_name" in excinfo.value.detail
    assert len(affinity.requests) == 0


def test_unexpected_field_is_rejected(call, affinity):
    with pytest.raises(InvalidArguments) as excinfo:
        call("affinity_create_person", {"first_name": "Ada", "last_name": "Lovelace", "nickname": "A"})
    assert "nickname" in excinfo.value.detail
    assert affinity.requests == []


def test_wrong_type_is_rejected(call, affinity):
    with pytest.raises(InvalidArguments) as excinfo:
        call("affinity_get_person", {"id": "42"})
    assert excinfo.value.detail.startswith("id:")
    assert affinity.requests == []


def test_empty_schema_rejects_any_argument(call, affinity):
    with pytest.raises(InvalidArguments):
        call("affinity_list_all_lists", {"page_size": 5})
    assert affinity.requests == []


def test_none_arguments_treated_as_empty(call, affinity):
    affinity.on("GET", "/lists", [{"id": 1, "name": "Deals"}])
    reply = call("affinity_list_all_lists", None)
    assert json.loads(text_of(reply)) == [{"id": 1, "name": "Deals"}]


def test_search_defaults_page_size_to_20(call, affinity):
    affinity.on("GET", "/persons", {"persons": [], "next_page_token": None})
    call("affinity_search_people", {"term": "ada"})
    (request,) = affinity.requests
    assert request.url.params["page_size"] == "20"
    assert request.url.params["term"] == "ada"
    assert "page_token" not in request.url.params


def test_explicit_page_size_is_forwarded(call, affinity):
    affinity.on("GET", "/organizations", {"organizations": []})
    call("affinity_search_organizations", {"page_size": 5, "page_token": "abc"})
    (request,) = affinity.requests
    assert request.url.params["page_size"] == "5"
    assert request.url.params["page_token"] == "abc"


def test_read_operations_pretty_print_remote_payload(call, affinity):
    payload = {"id": 7, "name": "Acme", "domains": ["acme.com"]}
    affinity.on("GET", "/organizations/7", payload)
    reply = call("affinity_get_organization", {"id": 7})
    assert text_of(reply) == json.dumps(payload, indent=2)


def test_create_person_end_to_end(call, affinity):
    affinity.on("POST", "/persons", {"id": 42, "first_name": "Ada", "last_name": "Lovelace"})
    reply = call("affinity_create_person", {"first_name": "Ada", "last_name": "Lovelace"})
    assert text_of(reply) == "Person created: Ada Lovelace (ID: 42)"
    (request,) = affinity.requests
    assert affinity.body(request) == {"first_name": "Ada", "last_name": "Lovelace"}


def test_update_person_moves_id_into_path(call, affinity):
    affinity.on("PUT", "/persons/42", {"id": 42, "first_name": "Ada", "last_name": "King"})
    reply = call("affinity_update_person", {"person_id": 42, "last_name": "King"})
    assert text_of(reply) == "Person updated: Ada King"
    (request,) = affinity.requests
    assert affinity.body(request) == {"last_name": "King"}


def test_organization_create_and_update(call, affinity):
    affinity.on("POST", "/organizations", {"id": 9, "name": "Acme"})
    affinity.on("PUT", "/organizations/9", {"id": 9, "name": "Acme Corp"})
    assert text_of(call("affinity_create_organization", {"name": "Acme", "domain": "acme.com"})) == (
        "Organization created: Acme (ID: 9)"
    )
    assert text_of(call("affinity_update_organization", {"organization_id": 9, "name": "Acme Corp"})) == (
        "Organization updated: Acme Corp"
    )
    create, update = affinity.requests
    assert affinity.body(create) == {"name": "Acme", "domain": "acme.com"}
    assert affinity.body(update) == {"name": "Acme Corp"}


def test_create_opportunity(call, affinity):
    affinity.on("POST", "/opportunities", {"id": 3, "name": "Series A"})
    reply = call("affinity_create_opportunity", {"name": "Series A", "organization_ids": [9]})
    assert text_of(reply) == "Opportunity created: Series A (ID: 3)"
    assert affinity.body(affinity.requests[0]) == {"name": "Series A", "organization_ids": [9]}


def test_search_opportunities_defaults_page_size_to_20(call, affinity):
    affinity.on("GET", "/opportunities", {"opportunities": [], "next_page_token": None})
    call("affinity_search_opportunities", {"term": "series"})
    (request,) = affinity.requests
    assert dict(request.url.params) == {"term": "series", "page_size": "20"}


def test_search_opportunities_takes_no_page_token(call, affinity):
    with pytest.raises(InvalidArguments) as excinfo:
        call("affinity_search_opportunities", {"term": "series", "page_token": "abc"})
    assert "page_token" in excinfo.value.detail
    assert affinity.requests == []


def test_get_opportunity_pretty_prints_record(call, affinity):
    payload = {"id": 3, "name": "Series A", "organization_ids": [9]}
    affinity.on("GET", "/opportunities/3", payload)
    reply = call("affinity_get_opportunity", {"id": 3})
    assert text_of(reply) == json.dumps(payload, indent=2)
    (request,) = affinity.requests
    assert request.method == "GET"
    assert request.url.path == "/opportunities/3"


def test_get_all_fields_pretty_prints_catalog(call, affinity):
    payload = [{"id": 11, "name": "Stage", "value_type": 7}, {"id": 12, "name": "Owner", "value_type": 0}]
    affinity.on("GET", "/fields", payload)
    reply = call("affinity_get_all_fields", {})
    assert text_of(reply) == json.dumps(payload, indent=2)
    (request,) = affinity.requests
    assert request.url.path == "/fields"


def test_remove_from_list_end_to_end(call, affinity):
    affinity.on("DELETE", "/list-entries/7", {"success": True})
    reply = call("affinity_remove_from_list", {"list_entry_id": 7})
    assert text_of(reply) == "Removed from list successfully"
    deletes = affinity.calls("DELETE")
    assert len(deletes) == 1
    assert len(affinity.requests) == 1
    assert "7" in deletes[0].url.path


def test_add_to_list_and_get_entries(call, affinity):
    affinity.on("POST", "/lists/5/list-entries", {"id": 77, "entity_id": 42})
    affinity.on("GET", "/lists/5/list-entries", [{"id": 77}])
    assert text_of(call("affinity_add_to_list", {"list_id": 5, "entity_id": 42})) == (
        "Added to list successfully (Entry ID: 77)"
    )
    call("affinity_get_list_entries", {"list_id": 5})
    post, get = affinity.requests
    assert affinity.body(post) == {"entity_id": 42}
    assert get.url.params["page_size"] == "20"


def test_get_field_values_forwards_only_given_ids(call, affinity):
    affinity.on("GET", "/field-values", [])
    call("affinity_get_field_values", {"person_id": 12})
    (request,) = affinity.requests
    assert dict(request.url.params) == {"person_id": "12"}


def test_remote_error_surfaces_as_fault(call, affinity):
    affinity.on("GET", "/persons/404", {"message": "Person not found"}, status=404)
    with pytest.raises(RemoteCallFailed) as excinfo:
        call("affinity_get_person", {"id": 404})
    assert excinfo.value.status_code == 404
    assert "Person not found" in excinfo.value.detail
    assert len(affinity.requests) == 1


def test_create_with_empty_response_body_is_a_remote_fault(call, affinity):
    affinity.on("POST", "/persons", None)
    with pytest.raises(RemoteCallFailed) as excinfo:
        call("affinity_create_person", {"first_name": "Ada", "last_name": "Lovelace"})
    assert "POST /persons returned no record" in excinfo.value.detail


def test_update_with_non_object_response_is_a_remote_fault(call, affinity):
    affinity.on("PUT", "/organizations/9", ["unexpected"])
    with pytest.raises(RemoteCallFailed, match="returned no record"):
        call("affinity_update_organization", {"organization_id": 9, "name": "Acme Corp"})


@pytest.mark.parametrize("name, path, args", [
    ("affinity_create_opportunity", "/opportunities", {"name": "Series A"}),
    ("affinity_create_note", "/notes", {"content": "hi", "parent_type": "person", "parent_id": 1}),
    ("affinity_add_to_list", "/lists/5/list-entries", {"list_id": 5, "entity_id": 42}),
    ("affinity_update_field_value", "/field-values", {"field_id": 99, "entity_id": 3, "value": "v"}),
])
def test_create_response_missing_id_is_a_remote_fault(call, affinity, name, path, args):
    affinity.on("GET", "/field-values", [])
    affinity.on("POST", path, {"name": "Series A"})
    with pytest.raises(RemoteCallFailed, match="missing id"):
        call(name, args)


def test_list_operations_describes_every_tool(dispatcher):
    listing = dispatcher.list_operations()
    assert len(listing) == 20
    by_name = {op["name"]: op for op in listing}
    create = by_name["affinity_create_person"]
    assert create["title"] == "Create Person"
    assert set(create["input_schema"]["required"]) == {"first_name", "last_name"}
    assert create["annotations"] == {"read_only": False, "destructive": False}


def test_concurrent_calls_are_independent(dispatcher, affinity):
    affinity.on("GET", "/persons/1", {"id": 1})
    affinity.on("GET", "/persons/2", {"id": 2})

    async def run():
        return await asyncio.gather(
            dispatcher.handle("affinity_get_person", {"id": 1}),
            dispatcher.handle("affinity_get_person", {"id": 2}),
        )

    first, second = asyncio.run(run())
    assert json.loads(text_of(first)) == {"id": 1}
    assert json.loads(text_of(second)) == {"id": 2}
