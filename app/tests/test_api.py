import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.pipeline.llm_service import GenerationClient


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def use_fake_genai(client: TestClient, fake, api_key: str = "test-key") -> None:
    client.app.state.generation_client = GenerationClient(api_key=api_key, client=fake)


def test_index_page_is_served(client) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert "AI Job Interview Prep Agent" in resp.text


def test_health(client) -> None:
    assert client.get("/health").json()["status"] == "ok"


def test_generate_prep_guide(client, fake_genai, guide_dict, guide_json) -> None:
    use_fake_genai(client, fake_genai(text=guide_json, sources=(("https://example.com", "Example"),)))

    resp = client.post("/api/v1/prep-guide", json={"companyName": "Goldman Sachs", "clientId": "c1"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["guide"] == guide_dict
    assert body["sources"] == [{"uri": "https://example.com", "title": "Example"}]


def test_blank_company_is_bad_request(client, fake_genai) -> None:
    fake = fake_genai(text="{}")
    use_fake_genai(client, fake)

    resp = client.post("/api/v1/prep-guide", json={"companyName": "   "})

    assert resp.status_code == 400
    assert resp.json() == {"detail": "Please enter a company name.", "error_type": "InvalidInputError"}
    assert fake.models.calls == []


def test_missing_credential(client, fake_genai) -> None:
    fake = fake_genai(text="{}")
    use_fake_genai(client, fake, api_key="")

    resp = client.post("/api/v1/prep-guide", json={"companyName": "Google"})

    assert resp.status_code == 500
    assert resp.json()["error_type"] == "ConfigurationError"
    assert fake.models.calls == []


def test_malformed_reply(client, fake_genai) -> None:
    use_fake_genai(client, fake_genai(text="I could not find anything."))

    resp = client.post("/api/v1/prep-guide", json={"companyName": "Google"})

    assert resp.status_code == 502
    assert resp.json()["error_type"] == "MalformedResponseError"


def test_schema_violation_reports_path(client, fake_genai) -> None:
    use_fake_genai(client, fake_genai(text='```json\n{"companyName":"X"}\n```'))

    resp = client.post("/api/v1/prep-guide", json={"companyName": "X"})

    assert resp.status_code == 502
    body = resp.json()
    assert body["error_type"] == "SchemaViolationError"
    assert body["path"] == "interviewQuestions"


def test_upstream_failure(client, fake_genai) -> None:
    use_fake_genai(client, fake_genai(error=ConnectionError("connection refused")))

    resp = client.post("/api/v1/prep-guide", json={"companyName": "Google"})

    assert resp.status_code == 502
    assert resp.json()["error_type"] == "UpstreamError"


def test_duplicate_generation_is_refused(client, fake_genai) -> None:
    use_fake_genai(client, fake_genai(text="{}"))
    client.app.state.request_guard._in_flight.add("generate:c1")

    resp = client.post("/api/v1/prep-guide", json={"companyName": "Google", "clientId": "c1"})

    assert resp.status_code == 409
    assert resp.json()["error_type"] == "RequestInProgressError"


def test_export_pdf(client, guide_dict) -> None:
    resp = client.post("/api/v1/prep-guide/export/pdf", json={"guide": guide_dict, "clientId": "c1"})

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert 'filename="Goldman_Sachs_Interview_Prep.pdf"' in resp.headers["content-disposition"]
    assert resp.content.startswith(b"%PDF")


def test_export_txt(client, guide_dict) -> None:
    resp = client.post("/api/v1/prep-guide/export/txt", json={"guide": guide_dict})

    assert resp.status_code == 200
    assert 'filename="Goldman_Sachs_Interview_Prep.txt"' in resp.headers["content-disposition"]
    assert "CODING ROUND ANALYSIS" in resp.text


def test_non_ascii_company_export_filename(client, guide_dict) -> None:
    guide_dict["companyName"] = "Société Générale"

    resp = client.post("/api/v1/prep-guide/export/txt", json={"guide": guide_dict})

    assert resp.status_code == 200
    assert "filename*=UTF-8''Soci%C3%A9t%C3%A9_G%C3%A9n%C3%A9rale_Interview_Prep.txt" in resp.headers["content-disposition"]


def test_export_rejects_invalid_guide(client, guide_dict) -> None:
    del guide_dict["salaryRange"]

    resp = client.post("/api/v1/prep-guide/export/pdf", json={"guide": guide_dict})

    assert resp.status_code == 422


def test_failed_pdf_export_is_reported_and_retryable(client, guide_dict, monkeypatch) -> None:
    from app.services.tools import pdf_export

    original = pdf_export._write_pdf

    def broken_writer(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(pdf_export, "_write_pdf", broken_writer)
    resp = client.post("/api/v1/prep-guide/export/pdf", json={"guide": guide_dict, "clientId": "c1"})
    assert resp.status_code == 500
    assert resp.json()["error_type"] == "ExportError"

    monkeypatch.setattr(pdf_export, "_write_pdf", original)
    retry = client.post("/api/v1/prep-guide/export/pdf", json={"guide": guide_dict, "clientId": "c1"})
    assert retry.status_code == 200
