import base64
from io import BytesIO

from PyPDF2 import PdfReader

from app import create_app


def _make_client():
    app = create_app("TestingConfig")
    return app.test_client()


def _post(client, files, query="", **fields):
    data = {key: value for key, value in fields.items()}
    data["pdf"] = [(BytesIO(content), name) for name, content in files]
    return client.post(
        f"/api/label_crop/process{query}", data=data, content_type="multipart/form-data"
    )


def test_process_returns_pdf_payload(make_blank_pdf):
    client = _make_client()
    response = _post(client, [("labels.pdf", make_blank_pdf(pages=2))], platform="meesho")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    data = payload["data"]
    assert data["filename"].startswith("processed-")
    assert data["filename"].endswith("-labels.pdf")
    assert data["page_count"] == 2
    assert data["settings"]["platform"] == "meesho"
    assert data["settings"]["margin"] == "40"
    output = base64.b64decode(data["pdf_base64"])
    assert output.startswith(b"%PDF")


def test_merge_names_output_and_sums_pages(make_sized_pdf):
    client = _make_client()
    response = _post(
        client,
        [("a.pdf", make_sized_pdf([101, 102])), ("b.pdf", make_sized_pdf([201]))],
        mergePdf="true",
        margin="0",
    )
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["filename"].startswith("merged-")
    assert data["page_count"] == 3
    reader = PdfReader(BytesIO(base64.b64decode(data["pdf_base64"])))
    assert [float(page.mediabox.width) for page in reader.pages] == [101, 102, 201]


def test_download_returns_attachment(make_blank_pdf):
    client = _make_client()
    response = _post(
        client, [("labels.pdf", make_blank_pdf())], query="?download=1", platform="flipkart"
    )
    assert response.status_code == 200
    assert response.headers.get("Content-Type") == "application/pdf"
    assert response.headers.get("Content-Disposition", "").startswith("attachment;")
    assert response.data.startswith(b"%PDF")


def test_missing_files_are_rejected():
    client = _make_client()
    response = client.post(
        "/api/label_crop/process", data={"platform": "custom"}, content_type="multipart/form-data"
    )
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "label_crop.file_missing"


def test_fake_pdf_signature_is_rejected():
    client = _make_client()
    response = _post(client, [("fake.pdf", b"not really a pdf")])
    assert response.status_code == 400
    error = response.get_json()["error"]
    assert error["code"] == "label_crop.invalid_upload"
    assert "signature" in error["message"].lower()


def test_too_many_files_are_rejected(make_blank_pdf):
    client = _make_client()
    files = [(f"doc-{index}.pdf", make_blank_pdf()) for index in range(11)]
    response = _post(client, files, mergePdf="true")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "label_crop.invalid_upload"


def test_invalid_settings_are_rejected(make_blank_pdf):
    client = _make_client()
    response = _post(client, [("a.pdf", make_blank_pdf())], margin="wide")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "label_crop.invalid_settings"

    response = _post(client, [("a.pdf", make_blank_pdf())], colour="red")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "label_crop.invalid_settings"


def test_corrupt_pdf_reports_processing_failure():
    client = _make_client()
    response = _post(client, [("broken.pdf", b"%PDF-1.4 truncated")])
    assert response.status_code == 500
    error = response.get_json()["error"]
    assert error["code"] == "label_crop.processing_failed"
    assert error["message"].startswith("PDF processing failed: ")
    assert error["details"]["stage"] == "load"
    assert error["request_id"]


def test_info_lists_platforms_and_features():
    client = _make_client()
    response = client.get("/api/label_crop/info")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["platforms"]["flipkart"] == {
        "fixedBox": {"x": 165, "y": 460, "width": 265, "height": 360}
    }
    assert data["platforms"]["custom"] == {"margin": 50}
    assert data["features"]["keepInvoice"]["status"] == "coming_soon"
    assert data["features"]["sortSku"]["status"] == "active"


def test_custom_text_whitespace_is_preserved(make_blank_pdf):
    client = _make_client()
    response = _post(
        client,
        [("labels.pdf", make_blank_pdf())],
        addText="true",
        customText="  Batch 7 ",
    )
    assert response.status_code == 200
    assert response.get_json()["data"]["settings"]["customText"] == "  Batch 7 "


def test_overlong_custom_text_is_rejected(make_blank_pdf):
    client = _make_client()
    response = _post(client, [("labels.pdf", make_blank_pdf())], customText="x" * 201)
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "label_crop.invalid_settings"
