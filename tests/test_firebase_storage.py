"""Firebase Storage 客户端测试"""

from urllib.parse import unquote

import httpx
import pytest

from talenthub.integrations import FirebaseStorageAPI, StorageError


class FakeBucket:
    """按对象路径保存内容的内存存储桶"""

    def __init__(self):
        self.objects = {}
        self.auth_headers = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.auth_headers.append(request.headers.get("Authorization"))

        if request.method == "POST":
            name = request.url.params["name"]
            self.objects[name] = (request.headers["Content-Type"], request.content)
            return httpx.Response(200, json={"name": name, "size": str(len(request.content))})

        path = request.url.raw_path.decode("ascii").split("?", 1)[0]
        name = unquote(path.split("/o/", 1)[1])
        if name not in self.objects:
            return httpx.Response(404, json={"error": {"code": 404, "message": "Not Found."}})
        return httpx.Response(200, content=self.objects[name][1])


@pytest.fixture
def bucket():
    return FakeBucket()


async def test_upload_then_fetch(bucket):
    storage = FirebaseStorageAPI(id_token="id-token", transport=httpx.MockTransport(bucket))

    metadata = await storage.upload("resumes/uid-jane/resume.pdf", b"%PDF-1.4", "application/pdf")
    content = await storage.fetch("resumes/uid-jane/resume.pdf")

    assert metadata["name"] == "resumes/uid-jane/resume.pdf"
    assert content == b"%PDF-1.4"
    assert bucket.objects["resumes/uid-jane/resume.pdf"][0] == "application/pdf"
    assert bucket.auth_headers == ["Firebase id-token", "Firebase id-token"]

    await storage.close()


async def test_fetch_missing_object(bucket):
    async with FirebaseStorageAPI(transport=httpx.MockTransport(bucket)) as storage:
        with pytest.raises(StorageError):
            await storage.fetch("resumes/missing.pdf")

    assert bucket.auth_headers == [None]


async def test_network_failure():
    def offline(request):
        raise httpx.ConnectError("offline")

    async with FirebaseStorageAPI(transport=httpx.MockTransport(offline)) as storage:
        with pytest.raises(StorageError):
            await storage.upload("certificates/a.png", b"png", "image/png")


def test_object_url_escapes_path():
    storage = FirebaseStorageAPI()
    url = storage._object_url("resumes/uid jane/cv.pdf")
    assert url.endswith("/o/resumes%2Fuid%20jane%2Fcv.pdf")
