"""
Tests for the upstream response normalizer.

Covers in-body status interpretation, transport status, candidate
extraction order and the validated / best-effort / failure outcomes.
"""

import pytest
from pydantic import BaseModel

from portal.modules.normalizer.candidates import SELF, Candidate
from portal.modules.normalizer.coercion import Grade
from portal.modules.normalizer.messages import DEFAULT_MESSAGES
from portal.modules.normalizer.normalizer import interpret_status, normalize
from portal.modules.normalizer.results import ErrorKind, Failure, RawFallback, Validated


class Row(BaseModel):
    nombre: str
    calificacion: Grade = None


class Profile(BaseModel):
    numero_control: str
    semestre: int


ROW_CANDIDATES = (Candidate.at("data"), Candidate.at("message.calificaciones"), SELF)


class TestStatusInterpretation:
    @pytest.mark.parametrize(
        "code,kind",
        [
            (401, ErrorKind.AUTH_EXPIRED),
            (403, ErrorKind.FORBIDDEN),
            (404, ErrorKind.NOT_FOUND),
            (500, ErrorKind.UPSTREAM_ERROR),
            (503, ErrorKind.UPSTREAM_ERROR),
        ],
    )
    def test_body_status_buckets(self, code, kind):
        raw = {"status": code, "data": [{"nombre": "Cálculo", "calificacion": 90}]}
        result = normalize(raw, ROW_CANDIDATES, Row, many=True)
        assert isinstance(result, Failure)
        assert result.reason is kind

    @pytest.mark.parametrize("http_status", [200, 401, 500])
    def test_body_status_wins_over_http_status(self, http_status):
        result = normalize({"status": 403}, ROW_CANDIDATES, Row, many=True, http_status=http_status)
        assert result.reason is ErrorKind.FORBIDDEN

    def test_other_codes_use_upstream_message(self):
        failure = interpret_status({"status": 422, "message": "Periodo cerrado"})
        assert failure.reason is ErrorKind.UPSTREAM_ERROR
        assert failure.message == "Periodo cerrado"

    def test_other_codes_fall_back_to_response_code_text(self):
        failure = interpret_status({"status": 409, "message": {"x": 1}, "responseCodeTxt": "CONFLICT"})
        assert failure.message == "CONFLICT"

    def test_other_codes_embed_code_in_generic_message(self):
        failure = interpret_status({"status": 418})
        assert "418" in failure.message

    @pytest.mark.parametrize("raw", [{"status": 200}, {"status": 0}, {}, {"status": None}, [1, 2], "text"])
    def test_success_or_absent_status_is_not_an_error(self, raw):
        assert interpret_status(raw) is None

    def test_string_status_code_is_understood(self):
        assert interpret_status({"status": "401"}).reason is ErrorKind.AUTH_EXPIRED

    def test_messages_can_be_overridden(self):
        messages = DEFAULT_MESSAGES.override(not_found="No se encontraron calificaciones.")
        failure = interpret_status({"status": 404}, messages)
        assert failure.message == "No se encontraron calificaciones."


class TestTransportStatus:
    def test_http_failure_carries_upstream_message(self):
        result = normalize({"message": "Token inválido"}, ROW_CANDIDATES, Row, many=True, http_status=400)
        assert result.reason is ErrorKind.TRANSPORT_ERROR
        assert result.message == "Token inválido"

    def test_http_failure_without_message_uses_generic_text(self):
        result = normalize({}, ROW_CANDIDATES, Row, many=True, http_status=502)
        assert result.reason is ErrorKind.TRANSPORT_ERROR
        assert result.message == DEFAULT_MESSAGES.transport_error


class TestExtraction:
    def test_first_matching_candidate_wins(self):
        raw = {"data": [{"nombre": "A"}], "message": {"calificaciones": [{"nombre": "B"}]}}
        result = normalize(raw, ROW_CANDIDATES, Row, many=True)
        assert result.source == "data"
        assert [r.nombre for r in result.value] == ["A"]

    def test_second_candidate_used_when_first_absent(self):
        raw = {"status": 200, "message": {"calificaciones": [{"nombre": "Física", "calificacion": "85"}]}}
        result = normalize(raw, ROW_CANDIDATES, Row, many=True)
        assert isinstance(result, Validated)
        assert result.source == "message.calificaciones"
        assert result.value[0].calificacion == "85.00"

    def test_wrong_kind_is_skipped(self):
        raw = {"data": {"not": "a list"}, "message": {"calificaciones": [{"nombre": "Química"}]}}
        result = normalize(raw, ROW_CANDIDATES, Row, many=True)
        assert result.source == "message.calificaciones"

    def test_envelope_itself_is_the_last_resort(self):
        result = normalize({"numero_control": "20030123", "semestre": 5}, (Candidate.at("data"), SELF), Profile)
        assert result.ok
        assert result.source == "self"

    def test_empty_array_is_a_valid_payload(self):
        result = normalize({"data": []}, ROW_CANDIDATES, Row, many=True)
        assert isinstance(result, Validated)
        assert result.value == []

    def test_no_candidate_matches(self):
        raw = {"data": None, "message": "ok"}
        result = normalize(raw, (Candidate.at("data"), Candidate.at("message.calificaciones")), Row, many=True)
        assert isinstance(result, Failure)
        assert result.reason is ErrorKind.NO_PAYLOAD

    def test_string_payload_for_tokens(self):
        raw = {"message": {"login": {"token": "abc.def.ghi"}}}
        candidates = (Candidate.at("message.login.token"), Candidate.at("token"))
        result = normalize(raw, candidates, None)
        assert result.ok
        assert result.value == "abc.def.ghi"

    def test_empty_string_is_not_a_token(self):
        result = normalize({"token": ""}, (Candidate.at("token"),), None)
        assert result.reason is ErrorKind.NO_PAYLOAD


class TestValidationOutcome:
    def test_object_fallback_keeps_raw_payload(self):
        raw = {"data": {"numero_control": "20030123", "semestre": "séptimo"}}
        result = normalize(raw, (Candidate.at("data"),), Profile)
        assert isinstance(result, RawFallback)
        assert result.ok and not result.validated
        assert result.reason is ErrorKind.VALIDATION_FALLBACK
        assert result.raw == raw["data"]
        assert result.value.numero_control == "20030123"
        assert result.value.semestre is None
        assert any("semestre" in e for e in result.errors)

    def test_one_bad_row_does_not_drop_the_batch(self):
        rows = [
            {"nombre": "Cálculo", "calificacion": "85"},
            {"calificacion": "abc"},
            {"nombre": "Física", "calificacion": 92.5},
        ]
        result = normalize({"data": rows}, ROW_CANDIDATES, Row, many=True)
        assert isinstance(result, RawFallback)
        assert len(result.value) == 3
        assert result.value[0].calificacion == "85.00"
        assert result.value[1].nombre is None
        assert result.value[1].calificacion is None
        assert result.value[2].calificacion == "92.50"
        assert all(e.startswith("[1].") for e in result.errors)

    def test_normalize_never_raises_on_garbage_rows(self):
        result = normalize({"data": [None, 7, "x"]}, ROW_CANDIDATES, Row, many=True)
        assert result.ok
        assert len(result.value) == 3
