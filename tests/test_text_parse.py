from fastapi.testclient import TestClient

from resume_analyzer.api.routes.analyze import get_pipeline
from resume_analyzer.core.pipeline import ResumePipeline
from resume_analyzer.main import app

app.dependency_overrides[get_pipeline] = lambda: ResumePipeline()
client = TestClient(app)

RESUME = b"""Jane Doe
jane.doe@example.com
(555) 123-4567
Skills: Python, FastAPI, SQL
https://github.com/janedoe

EXPERIENCE
Software Engineer at TechCorp (2020-Present)
- Developed web applications
"""


def test_health_routes():
    assert client.get("/").json()["service"] == "resume-analyzer"
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_extract_txt_upload():
    files = {"file": ("resume.txt", RESUME, "text/plain")}
    r = client.post("/extract", files=files)
    assert r.status_code == 200
    data = r.json()

    assert data["profile"]["name"] == "Jane Doe"
    assert data["profile"]["email"] == "jane.doe@example.com"
    assert "Python" in data["profile"]["skills"]["technical"]
    assert data["profile"]["github"] == "https://github.com/janedoe"
    assert data["profile"]["experience"][0]["company"] == "TechCorp"

    # camelCase on the wire
    assert data["metadata"]["method"] == "Heuristic-Only"
    assert 0.0 <= data["metadata"]["completenessScore"] <= 1.0
    assert data["fileName"] == "resume.txt"
    assert data["fileSize"].endswith("Bytes")


def test_extract_empty_file():
    r = client.post("/extract", files={"file": ("resume.txt", b"", "text/plain")})
    assert r.status_code == 400


def test_extract_unsupported_type():
    r = client.post("/extract", files={"file": ("photo.png", b"\x89PNG....", "image/png")})
    assert r.status_code == 415
    assert r.json()["detail"]["error_code"] == "UNSUPPORTED_DOCUMENT"


def test_extract_too_short():
    r = client.post("/extract", files={"file": ("resume.txt", b"Jane Doe", "text/plain")})
    assert r.status_code == 422
    assert r.json()["detail"]["error_code"] == "INPUT_ERROR"


def test_extract_pasted_text():
    r = client.post("/extract/text", json={"text": RESUME.decode()})
    assert r.status_code == 200
    assert r.json()["profile"]["phone"] == "(555) 123-4567"
    assert r.json()["fileName"] is None


def test_extract_pasted_text_too_short():
    r = client.post("/extract/text", json={"text": ""})
    assert r.status_code == 422


def test_score_profile():
    profile = client.post("/extract/text", json={"text": RESUME.decode()}).json()["profile"]
    r = client.post("/score", json={"profile": profile})
    assert r.status_code == 200
    data = r.json()

    scores = data["scores"]
    assert data["overallScore"] == scores["ats"] + scores["keyword"] + scores["content"] + scores["relevance"]
    assert data["source"] == "heuristic"
    assert "trendingKeywords" in data["industrySpecific"]


def test_match_job_description():
    profile = {"skills": {"technical": ["React", "AWS"], "soft": []}}
    r = client.post("/match", json={"profile": profile, "jobDescription": "react, node.js, agile"})
    assert r.status_code == 200
    data = r.json()

    assert data["matchPercentage"] == 33
    assert data["matched"] == ["react"]
    assert data["missing"] == ["node.js", "agile"]


def test_match_requires_job_description():
    r = client.post("/match", json={"profile": {}})
    assert r.status_code == 422
