from conftest import (
    ATTESTATION_TYPE,
    SCHEMA_TYPE,
    attestation_object,
    oid,
    schema_object,
)

from models.schemas import AttestationRecord, ObjectKind, SchemaRecord, SuiObjectData


def _obj(raw):
    return SuiObjectData.model_validate(raw)


def test_classifies_exact_schema_type(classifier):
    record = classifier.classify(ObjectKind.SCHEMA, _obj(schema_object(oid(1))))

    assert isinstance(record, SchemaRecord)
    assert record.object_id == oid(1)
    assert record.name == "KYC"
    assert record.description == "KYC schema"
    assert record.definition_json == '{"verified": "bool"}'
    assert record.timestamp == "1700000000000"
    assert record.version == "7"
    assert record.previous_transaction == f"tx-{oid(1)[-4:]}"


def test_classifies_suffix_schema_type(classifier):
    raw = schema_object(oid(2), object_type="0xdead::registry::Schema")
    assert classifier.classify(ObjectKind.SCHEMA, _obj(raw)) is not None


def test_classifies_substring_schema_type(classifier):
    raw = schema_object(oid(3), object_type=f"{SCHEMA_TYPE}<u64>")
    assert classifier.classify(ObjectKind.SCHEMA, _obj(raw)) is not None


def test_attestation_is_not_classified_as_schema(classifier):
    raw = attestation_object(oid(4), schema_id=oid(1))
    assert classifier.classify(ObjectKind.SCHEMA, _obj(raw)) is None


def test_attestation_fields_copied_verbatim(classifier):
    record = classifier.classify(ObjectKind.ATTESTATION, _obj(attestation_object(oid(5), schema_id=oid(1))))

    assert isinstance(record, AttestationRecord)
    assert record.schema_id == oid(1)
    assert record.data_hash == [1, 2, 3, 4]
    assert record.attestor == record.subject_address
    assert record.has_subject


def test_missing_object_or_content_is_skipped(classifier):
    raw = schema_object(oid(6))
    raw.pop("content")

    assert classifier.classify(ObjectKind.SCHEMA, None) is None
    assert classifier.classify(ObjectKind.SCHEMA, _obj(raw)) is None


def test_non_move_content_returns_envelope_only(classifier):
    raw = schema_object(oid(7))
    raw["content"] = {"dataType": "package", "disassembled": {}}

    record = classifier.classify(ObjectKind.SCHEMA, _obj(raw))

    assert isinstance(record, SchemaRecord)
    assert record.object_id == oid(7)
    assert record.type == SCHEMA_TYPE
    assert record.name is None
    assert record.creator is None


def test_type_falls_back_to_content_type(classifier):
    raw = attestation_object(oid(8), schema_id=oid(1))
    raw.pop("type")

    record = classifier.classify(ObjectKind.ATTESTATION, _obj(raw))

    assert record is not None
    assert record.type == ATTESTATION_TYPE


def test_kind_stays_stable_across_fetches(classifier):
    raw = attestation_object(oid(9), schema_id=oid(1))
    kinds = {classifier.kind_of(_obj(raw).type) for _ in range(3)}
    assert kinds == {ObjectKind.ATTESTATION}


def test_malformed_fields_are_skipped(classifier):
    raw = schema_object(oid(10), object_type=f"0x2::dynamic_field::Field<{SCHEMA_TYPE}Key, {SCHEMA_TYPE}>")
    raw["content"]["fields"]["name"] = {"id": {"id": oid(11)}}

    assert classifier.classify(ObjectKind.SCHEMA, _obj(raw)) is None


def test_type_of_prefers_envelope_then_content(classifier):
    raw = schema_object(oid(12))
    assert classifier.type_of(_obj(raw)) == SCHEMA_TYPE

    raw.pop("type")
    assert classifier.type_of(_obj(raw)) == SCHEMA_TYPE

    raw["content"] = {"dataType": "package", "disassembled": {}}
    assert classifier.type_of(_obj(raw)) is None
