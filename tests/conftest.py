"""
Shared test fixtures: an in-memory S3 client and an in-memory sink
"""

import logging

import pytest
from botocore.exceptions import ClientError

from rowgen.schema import DateGen, Field, IntegerGen, Schema, StringGen
from rowgen.sinks import Sink
from rowgen.utils import ROOT_LOGGER_NAME, TRANSPORT_LOGGER_NAMES


def client_error(operation: str, code: str = "InternalError", message: str = "boom") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeS3Client:
    """Records multipart calls; optionally fails on a given step"""

    def __init__(self, fail_on_part=None, fail_initiate=False, fail_complete=False, fail_abort=False):
        self.fail_on_part = fail_on_part
        self.fail_initiate = fail_initiate
        self.fail_complete = fail_complete
        self.fail_abort = fail_abort

        self.initiated = []
        self.parts = []
        self.completed = []
        self.aborted = []

    def create_multipart_upload(self, Bucket, Key):
        if self.fail_initiate:
            raise client_error("CreateMultipartUpload", "AccessDenied", "Access Denied")
        self.initiated.append((Bucket, Key))
        return {"Bucket": Bucket, "Key": Key, "UploadId": "upload-1"}

    def upload_part(self, Bucket, Key, UploadId, PartNumber, Body):
        if PartNumber == self.fail_on_part:
            raise client_error("UploadPart")
        self.parts.append({"PartNumber": PartNumber, "Body": Body, "UploadId": UploadId})
        return {"ETag": f'"etag-{PartNumber}"'}

    def complete_multipart_upload(self, Bucket, Key, UploadId, MultipartUpload):
        if self.fail_complete:
            raise client_error("CompleteMultipartUpload")
        self.completed.append(MultipartUpload)
        return {"Bucket": Bucket, "Key": Key}

    def abort_multipart_upload(self, Bucket, Key, UploadId):
        self.aborted.append(UploadId)
        if self.fail_abort:
            raise client_error("AbortMultipartUpload", "NoSuchUpload", "gone")
        return {}


class MemorySink(Sink):
    """Keeps every batch in memory and records its lifecycle"""

    name = "memory"

    def __init__(self, fail_on_write=False, logger=None):
        super().__init__(logger)
        self.fail_on_write = fail_on_write
        self.batches = []
        self.opened = False
        self.finalized = False
        self.aborted = False

    def open(self):
        self.opened = True

    def write(self, batch):
        if self.fail_on_write:
            raise OSError("disk full")
        self.batches.append(batch)

    def finalize(self):
        self.finalized = True

    def abort(self):
        self.aborted = True

    @property
    def output(self) -> str:
        return "".join(self.batches)


@pytest.fixture
def s3_client():
    return FakeS3Client()


@pytest.fixture
def memory_sink():
    return MemorySink()


@pytest.fixture
def delimited_schema():
    return Schema(
        table_name="people",
        delimiter=",",
        fields=(
            Field("id", "int", IntegerGen(min=0, max=1000)),
            Field("code", "char", StringGen(length=4)),
            Field("born", "date", DateGen()),
        ),
    )


@pytest.fixture
def fixed_schema():
    return Schema(
        table_name="accounts",
        delimiter="fixed",
        fields=(
            Field("id", "int", IntegerGen(min=0, max=1000), length=5, padding="0"),
            Field("code", "char", StringGen(length=4), length=4),
            Field("born", "date", DateGen(), length=10, padding=" "),
        ),
    )


@pytest.fixture
def reset_rowgen_logger():
    yield
    for name in (ROOT_LOGGER_NAME,) + TRANSPORT_LOGGER_NAMES:
        configured = logging.getLogger(name)
        for handler in list(configured.handlers):
            configured.removeHandler(handler)
            handler.close()
        configured.setLevel(logging.NOTSET)
        configured.propagate = True
