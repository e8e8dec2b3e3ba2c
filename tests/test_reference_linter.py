"""Tests for reference extraction and resolution."""

from openapi_linter.linter import check_references, extract_refs
from openapi_linter.linter.reference_linter import pointer_segments
from openapi_linter.linter.report import FindingCode, Severity

from conftest import make_document, spec_with_schemas


class TestExtractRefs:

    def test_collects_refs_everywhere(self, pet_store_spec):
        refs = extract_refs(make_document(pet_store_spec).root)
        assert refs == {
            "#/components/schemas/Pet",
            "#/components/schemas/Cat",
            "#/components/schemas/Dog",
        }

    def test_duplicates_collapse(self):
        document = make_document({"a": [{"$ref": "#/x"}, {"$ref": "#/x"}], "b": {"$ref": "#/x"}})
        assert extract_refs(document.root) == {"#/x"}

    def test_non_string_ref_is_descended(self):
        document = make_document({"$ref": {"inner": {"$ref": "#/y"}}, "n": {"$ref": 5}})
        assert extract_refs(document.root) == {"#/y"}

    def test_scalars_and_empty_containers(self):
        assert extract_refs(make_document({}).root) == frozenset()
        assert extract_refs(make_document({"a": [], "b": "text"}).root) == frozenset()

    def test_repeated_extraction_is_identical(self, pet_store_spec):
        document = make_document(pet_store_spec)
        assert extract_refs(document.root) == extract_refs(document.root)


class TestResolveReferences:

    def test_resolvable_refs_produce_nothing(self, pet_store_spec):
        document = make_document(pet_store_spec)
        assert check_references(document, extract_refs(document.root)) == []

    def test_first_failing_segment_is_reported(self):
        document = make_document(spec_with_schemas({"Pet": {"type": "object"}}))
        findings = check_references(document, {"#/components/schemas/Dog/properties"})
        assert len(findings) == 1
        assert findings[0].severity is Severity.ERROR
        assert findings[0].code is FindingCode.UNRESOLVED_REFERENCE
        assert findings[0].message == (
            "Missing schema definition: #/components/schemas/Dog/properties (failed at 'Dog')"
        )
        assert findings[0].yaml_path == "/components/schemas"

    def test_failure_at_first_segment(self, minimal_spec):
        findings = check_references(make_document(minimal_spec), {"#/definitions/Pet"})
        assert "(failed at 'definitions')" in findings[0].message

    def test_cannot_descend_into_scalar(self):
        document = make_document(spec_with_schemas({"Pet": {"type": "object"}}))
        findings = check_references(document, {"#/components/schemas/Pet/type/x"})
        assert "(failed at 'x')" in findings[0].message

    def test_sequence_index_segments(self):
        document = make_document(spec_with_schemas({"Pet": {"allOf": [{"type": "object"}]}}))
        assert check_references(document, {"#/components/schemas/Pet/allOf/0/type"}) == []
        findings = check_references(document, {"#/components/schemas/Pet/allOf/1"})
        assert "(failed at '1')" in findings[0].message

    def test_escaped_segments(self, minimal_spec):
        minimal_spec["paths"] = {"/pets": {"get": {"responses": {}}}}
        document = make_document(minimal_spec)
        assert check_references(document, {"#/paths/~1pets/get"}) == []

    def test_external_ref_is_a_warning(self, minimal_spec):
        findings = check_references(make_document(minimal_spec), {"common.yaml#/Pet"})
        assert len(findings) == 1
        assert findings[0].severity is Severity.WARNING
        assert findings[0].code is FindingCode.EXTERNAL_REFERENCE_WARNING
        assert findings[0].message == "External reference found: common.yaml#/Pet"

    def test_each_ref_reported_independently(self, minimal_spec):
        findings = check_references(make_document(minimal_spec), {"#/a", "#/b", "http://x/y"})
        assert [f.code for f in findings] == [
            FindingCode.UNRESOLVED_REFERENCE,
            FindingCode.UNRESOLVED_REFERENCE,
            FindingCode.EXTERNAL_REFERENCE_WARNING,
        ]

    def test_pointer_segments(self):
        assert pointer_segments("#/components/schemas/Pet") == ["components", "schemas", "Pet"]
        assert pointer_segments("#/paths/~1pets") == ["paths", "~1pets"]
