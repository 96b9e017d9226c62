from patria.file_helper import (
    HTTP_404_HEADER,
    HTTP_RESPONSE_HEADER,
    create_http_response,
    not_found_response,
)


def test_not_found_response_bytes():
    assert not_found_response() == b"HTTP/1.1 404 Not Found"


def test_existing_file_is_served(tmp_path):
    content = b"<html><body>chat</body></html>"
    page = tmp_path / "index.html"
    page.write_bytes(content)
    response = create_http_response(str(page))
    assert response == HTTP_RESPONSE_HEADER.encode("ascii") + content


def test_response_starts_with_status_and_ends_headers(tmp_path):
    page = tmp_path / "style.css"
    page.write_bytes(b"body {}")
    response = create_http_response(page)
    assert response.startswith(b"HTTP/1.1 200 OK\n")
    head, _, body = response.partition(b"\n\n")
    assert body == b"body {}"
    assert b"Connection: keep-alive" in head


def test_empty_file_gives_only_header(tmp_path):
    page = tmp_path / "empty.txt"
    page.write_bytes(b"")
    assert create_http_response(page) == HTTP_RESPONSE_HEADER.encode("ascii")


def test_missing_file_gives_404(tmp_path):
    assert create_http_response(tmp_path / "absent.html") == not_found_response()


def test_hidden_path_is_refused(tmp_path):
    hidden = tmp_path / ".secret_config"
    hidden.write_bytes(b"hidden contents")
    assert create_http_response(str(hidden)) == HTTP_404_HEADER.encode("ascii")


def test_parent_traversal_is_refused(tmp_path):
    page = tmp_path / "page.html"
    page.write_bytes(b"x")
    traversal = f"{tmp_path}/sub/../page.html"
    assert create_http_response(traversal) == not_found_response()


def test_directory_gives_404(tmp_path):
    assert create_http_response(tmp_path) == not_found_response()


def test_binary_file_round_trips(tmp_path):
    content = bytes(range(256))
    image = tmp_path / "image.bin"
    image.write_bytes(content)
    response = create_http_response(image)
    assert response[len(HTTP_RESPONSE_HEADER):] == content