import tempfile
import threading
import time
from contextlib import contextmanager
from pathlib import Path

import pytest

from audio_splitter.config import SplitterConfig
from audio_splitter.domain import AudioInfo, SegmentPlanner, SegmentPublisher, SegmentWindow
from audio_splitter.exceptions import (
    StorageDownloadError,
    StorageUploadError,
    TranscodeError,
    TranscriptionSubmitError,
)
from audio_splitter.handlers import SplitPipeline
from audio_splitter.infrastructure.interfaces import (
    AudioProber,
    AudioTranscoder,
    StorageClient,
    TranscriptionService,
)


class FakeStorage(StorageClient):
    """In-memory object store keyed by (bucket, object name)."""

    def __init__(self, fail_on_upload=()):
        self.objects = {}
        self.metadata = {}
        self.content_types = {}
        self.buckets = set()
        self._fail_on_upload = set(fail_on_upload)
        self._lock = threading.Lock()

    def put(self, bucket_name, object_name, data: bytes):
        self.objects[(bucket_name, object_name)] = data

    def download_file(self, bucket_name, object_name, file_path):
        try:
            data = self.objects[(bucket_name, object_name)]
        except KeyError as e:
            raise StorageDownloadError(object_name, e) from e
        Path(file_path).write_bytes(data)

    def upload(self, bucket_name, object_name, data, size, content_type, metadata=None):
        if object_name in self._fail_on_upload:
            raise StorageUploadError(object_name, ConnectionError("connection reset"))
        payload = data.read()
        assert len(payload) == size
        with self._lock:
            self.objects[(bucket_name, object_name)] = payload
            self.metadata[(bucket_name, object_name)] = dict(metadata or {})
            self.content_types[(bucket_name, object_name)] = content_type
        return f"s3://{bucket_name}/{object_name}"

    def presigned_url(self, bucket_name, object_name, expires_seconds):
        return f"https://storage.local/{bucket_name}/{object_name}?expires={expires_seconds}"

    def ensure_bucket_exists(self, bucket_name):
        self.buckets.add(bucket_name)


class FakeProber(AudioProber):
    def __init__(self, duration_seconds=0.0, error=None):
        self.duration_seconds = duration_seconds
        self.error = error
        self.probed_paths = []

    def probe(self, audio_path):
        self.probed_paths.append(audio_path)
        assert audio_path.exists()
        if self.error is not None:
            raise self.error
        return AudioInfo(
            duration_seconds=self.duration_seconds,
            size_bytes=audio_path.stat().st_size,
            format="mp3",
        )


class FakeTranscoder(AudioTranscoder):
    """Writes ``segment-{index}`` into a scratch file instead of encoding audio."""

    def __init__(self, fail_on=(), delay=0.0):
        self.fail_on = set(fail_on)
        self.delay = delay
        self.windows = []
        self.segment_paths = []
        self._lock = threading.Lock()

    @contextmanager
    def extract(self, source_path, window: SegmentWindow):
        with self._lock:
            self.windows.append(window)
        if self.delay:
            time.sleep(self.delay)
        if window.index in self.fail_on:
            raise TranscodeError(window.index, RuntimeError("encoder exited with status 1"))
        with tempfile.TemporaryDirectory() as temp_dir:
            segment_path = Path(temp_dir) / f"segment_{window.index}.mp3"
            segment_path.write_bytes(f"segment-{window.index}".encode())
            with self._lock:
                self.segment_paths.append(segment_path)
            yield segment_path


class FakeTranscriptionService(TranscriptionService):
    def __init__(self, fail_on_uris=()):
        self.fail_on_uris = set(fail_on_uris)
        self.calls = []
        self._lock = threading.Lock()

    def start_job(
        self, job_name, media_uri, media_format, language_code, output_bucket, output_key
    ):
        with self._lock:
            self.calls.append(
                {
                    "job_name": job_name,
                    "media_uri": media_uri,
                    "media_format": media_format,
                    "language_code": language_code,
                    "output_bucket": output_bucket,
                    "output_key": output_key,
                }
            )
        if media_uri in self.fail_on_uris:
            raise TranscriptionSubmitError(job_name, RuntimeError("LimitExceededException"))
        return f"handle-{job_name}"


class SpyPlanner(SegmentPlanner):
    def __init__(self):
        self.calls = 0

    def plan(self, total_duration, segment_length):
        self.calls += 1
        return super().plan(total_duration, segment_length)


def index_job_names(segment):
    return f"job-{segment.index}"


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def transcoder():
    return FakeTranscoder()


@pytest.fixture
def planner():
    return SpyPlanner()


@pytest.fixture
def splitter_config():
    return SplitterConfig(max_workers=1)


@pytest.fixture
def make_pipeline(storage, transcoder, planner, splitter_config):
    """Builds a pipeline around the shared fakes; the prober is per test."""

    def _make(prober, config=None, dispatcher=None, storage_client=None):
        store = storage_client or storage
        cfg = config or splitter_config
        return SplitPipeline(
            storage=store,
            prober=prober,
            planner=planner,
            transcoder=transcoder,
            publisher=SegmentPublisher(store, cfg.target_codec),
            config=cfg,
            dispatcher=dispatcher,
        )

    return _make
