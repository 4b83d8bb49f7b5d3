"""Unit tests for the product downloader."""

from concurrent.futures import ThreadPoolExecutor

import pytest
import requests
import requests_mock
from tenacity import wait_none

from s1ocn.domain.errors import ProductDownloadError
from s1ocn.infrastructure.config.settings import Settings
from s1ocn.infrastructure.http.product_downloader import ProductDownloader

BASE_URL = "https://catalogue.example.test/odata/v1"
PRODUCT_URL = f"{BASE_URL}/Products(abc-123)/$value"
ZIPPER_URL = "https://zipper.example.test/odata/v1/Products(abc-123)/$value"


@pytest.fixture
def downloader():
    """Create downloader without retry waits."""
    settings = Settings(catalogue_base_url=BASE_URL, download_max_attempts=3, max_redirects=2)
    return ProductDownloader(settings, wait=wait_none())


def test_product_url(downloader):
    """Test the value endpoint of a product."""
    assert downloader.product_url("abc-123") == PRODUCT_URL


def test_download_success(downloader, tmp_path):
    """Test streaming a package to disk."""
    with requests_mock.Mocker() as m:
        m.get(PRODUCT_URL, content=b"PK\x03\x04payload")
        path = downloader.download("abc-123", "S1A_OCN", tmp_path / "out", "token")

        assert m.last_request.headers["Authorization"] == "Bearer token"

    assert path == tmp_path / "out" / "S1A_OCN.zip"
    assert path.read_bytes() == b"PK\x03\x04payload"
    assert not (tmp_path / "out" / "S1A_OCN.zip.part").exists()


def test_redirect_keeps_authorization(downloader, tmp_path):
    """Test the bearer header survives a cross host redirect."""
    with requests_mock.Mocker() as m:
        m.get(PRODUCT_URL, status_code=301, headers={"Location": ZIPPER_URL})
        m.get(ZIPPER_URL, content=b"data")
        path = downloader.download("abc-123", "S1A_OCN", tmp_path, "token")

        assert m.call_count == 2
        assert m.request_history[1].url == ZIPPER_URL
        assert m.request_history[1].headers["Authorization"] == "Bearer token"

    assert path.read_bytes() == b"data"


def test_existing_file_skipped(downloader, tmp_path):
    """Test that an existing package is not downloaded again."""
    existing = tmp_path / "S1A_OCN.zip"
    existing.write_bytes(b"old")

    with requests_mock.Mocker() as m:
        path = downloader.download("abc-123", "S1A_OCN", tmp_path, "token")

        assert m.call_count == 0

    assert path == existing
    assert existing.read_bytes() == b"old"


def test_transient_failure_retried(downloader, tmp_path):
    """Test a failed attempt is retried."""
    with requests_mock.Mocker() as m:
        m.get(PRODUCT_URL, [{"status_code": 503}, {"content": b"data"}])
        path = downloader.download("abc-123", "S1A_OCN", tmp_path, "token")

        assert m.call_count == 2

    assert path.read_bytes() == b"data"


def test_failure_after_max_attempts(downloader, tmp_path):
    """Test persistent failures raise after the configured attempts."""
    with requests_mock.Mocker() as m:
        m.get(PRODUCT_URL, exc=requests.ConnectionError("reset"))
        with pytest.raises(ProductDownloadError, match="abc-123"):
            downloader.download("abc-123", "S1A_OCN", tmp_path, "token")

        assert m.call_count == 3

    assert not (tmp_path / "S1A_OCN.zip").exists()


def test_redirect_loop_fails(downloader, tmp_path):
    """Test an endless redirect chain is given up."""
    with requests_mock.Mocker() as m:
        m.get(PRODUCT_URL, status_code=302, headers={"Location": PRODUCT_URL})
        with pytest.raises(ProductDownloadError):
            downloader.download("abc-123", "S1A_OCN", tmp_path, "token")


def test_session_per_thread(downloader):
    """Test worker threads each get their own session."""
    main_session = downloader.session

    with ThreadPoolExecutor(max_workers=2) as executor:
        worker_session = executor.submit(lambda: downloader.session).result()

    assert downloader.session is main_session
    assert isinstance(worker_session, requests.Session)
    assert worker_session is not main_session


def test_parallel_downloads_use_separate_sessions(tmp_path):
    """Test concurrent downloads go through one session per thread."""
    created = []

    def session_factory():
        session = requests.Session()
        created.append(session)
        return session

    downloader = ProductDownloader(
        Settings(catalogue_base_url=BASE_URL),
        session_factory=session_factory,
        wait=wait_none(),
    )

    with requests_mock.Mocker() as m:
        m.get(f"{BASE_URL}/Products(a)/$value", content=b"a")
        m.get(f"{BASE_URL}/Products(b)/$value", content=b"b")
        with ThreadPoolExecutor(max_workers=2) as executor:
            paths = list(
                executor.map(
                    lambda args: downloader.download(*args, tmp_path, "token"),
                    [("a", "first"), ("b", "second")],
                )
            )

    assert [path.read_bytes() for path in paths] == [b"a", b"b"]
    assert 1 <= len(created) <= 2
    assert len(set(map(id, created))) == len(created)
