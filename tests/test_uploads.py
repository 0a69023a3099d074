import base64

import pytest

from mock_backend.errors import BadUpload, NotFound

PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def test_multipart_png_round_trip(client, user_headers):
    r = client.post(
        "/upload",
        files={"file": ("pixel.png", PNG_BYTES, "image/png")},
        headers=user_headers,
    )
    assert r.status_code == 200
    filename = r.json()["filename"]
    assert filename.endswith(".png")

    r = client.get(f"/uploads/{filename}")
    assert r.status_code == 200
    assert r.content == PNG_BYTES


def test_multipart_rejects_pdf_without_writing(client, user_headers, file_store):
    r = client.post(
        "/upload",
        files={"file": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
        headers=user_headers,
    )
    assert r.status_code == 400
    assert not file_store.root.exists() or not any(file_store.root.iterdir())


def test_multipart_without_file_is_400(client, user_headers):
    r = client.post("/upload", data={"other": "x"}, headers=user_headers)
    assert r.status_code == 400


def test_upload_requires_token(client):
    r = client.post("/upload", files={"file": ("pixel.png", PNG_BYTES, "image/png")})
    assert r.status_code == 401


def test_base64_round_trip(client, user_headers):
    data_uri = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()
    r = client.post("/upload-base64", json={"image_base64": data_uri}, headers=user_headers)
    assert r.status_code == 200
    filename = r.json()["filename"]
    assert filename.endswith(".png")

    r = client.get(f"/uploads/{filename}")
    assert r.status_code == 200
    assert r.content == PNG_BYTES


@pytest.mark.parametrize("body", [
    {},
    {"image_base64": base64.b64encode(PNG_BYTES).decode()},
    {"image_base64": "data:text/plain;base64,aGVsbG8="},
    {"image_base64": "data:image/png;base64,***not base64***"},
])
def test_base64_rejects_bad_payloads(client, user_headers, body):
    r = client.post("/upload-base64", json=body, headers=user_headers)
    assert r.status_code == 400
    assert "error" in r.json()


def test_missing_file_is_404(client):
    r = client.get("/uploads/does-not-exist.png")
    assert r.status_code == 404
    assert r.json() == {"error": "File not found"}


def test_filenames_are_unique(file_store):
    names = {file_store.save_base64("data:image/gif;base64,R0lGODlh") for _ in range(5)}
    assert len(names) == 5


def test_resolve_stays_inside_uploads_dir(file_store, tmp_path):
    (tmp_path / "secret.txt").write_text("x")
    file_store.root.mkdir(parents=True, exist_ok=True)
    with pytest.raises(NotFound):
        file_store.resolve("../secret.txt")


def test_save_upload_checks_mime_type_first(file_store):
    class Exploding:
        def read(self):
            raise AssertionError("stream must not be read")

    with pytest.raises(BadUpload):
        file_store.save_upload("application/pdf", "x.pdf", Exploding())
