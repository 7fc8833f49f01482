"""Tests for the photo ingestion pipeline."""

import re
from io import BytesIO
from uuid import uuid4

import pytest
from PIL import Image

from meeting_admin.domain.errors import (
    DecodeError,
    InvalidMediaType,
    MetadataWriteError,
    PhotoLimitExceeded,
    UploadError,
)
from meeting_admin.domain.photos import (
    BatchReport,
    NotificationVariant,
    PhotoOutcome,
    PhotoRecord,
    RejectionReason,
    SourceImage,
)
from meeting_admin.services.photo_storage import storage_path_from_url
from meeting_admin.services.photos import PhotoMetadataRecorder
from tests.conftest import InMemoryPhotoRepository, make_image_bytes

KEY_PATTERN = re.compile(r"^[0-9a-f-]{36}/\d{13}\.jpg$")


def _jpeg(name: str, width: int = 800, height: int = 600) -> SourceImage:
    return SourceImage(
        file_name=name, media_type="image/jpeg", data=make_image_bytes(width, height)
    )


def test_ingest_batch_records_each_photo(
    ingestion_service, blob_store, photo_repository
) -> None:
    meeting_id = uuid4()

    report = ingestion_service.ingest_batch(
        meeting_id, [_jpeg("a.jpg"), _jpeg("b.jpg")]
    )

    assert [outcome.ok for outcome in report.outcomes] == [True, True]
    assert len(blob_store.objects) == 2
    assert all(KEY_PATTERN.match(key) for key in blob_store.objects)
    records = report.uploaded
    assert [record.file_name for record in records] == ["a.jpg", "b.jpg"]
    for record in records:
        assert record.meeting_id == meeting_id
        key = storage_path_from_url(record.photo_url)
        assert record.file_size == len(blob_store.objects[key])


def test_large_jpeg_is_downscaled_before_upload(
    ingestion_service, blob_store, photo_repository
) -> None:
    meeting_id = uuid4()
    source = _jpeg("site-visit.jpg", 4000, 3000)

    report = ingestion_service.ingest_batch(meeting_id, [source])

    (record,) = report.uploaded
    (stored,) = blob_store.objects.values()
    assert record.file_size == len(stored)
    assert len(photo_repository.list_photos(meeting_id)) == 1
    with Image.open(BytesIO(stored)) as decoded:
        assert decoded.size == (1920, 1440)


def test_invalid_middle_entry_does_not_stop_the_batch(
    ingestion_service, photo_repository
) -> None:
    meeting_id = uuid4()
    sources = [
        _jpeg("first.jpg"),
        SourceImage(file_name="notes.txt", media_type="text/plain", data=b"hello"),
        _jpeg("third.jpg"),
    ]

    report = ingestion_service.ingest_batch(meeting_id, sources)

    assert [outcome.file_name for outcome in report.outcomes] == [
        "first.jpg",
        "notes.txt",
        "third.jpg",
    ]
    assert report.outcomes[0].ok
    assert isinstance(report.outcomes[1].error, InvalidMediaType)
    assert report.outcomes[2].ok
    assert len(photo_repository.list_photos(meeting_id)) == 2


def test_fourth_photo_hits_the_limit_and_leaves_an_orphan_blob(
    ingestion_service, blob_store, photo_repository
) -> None:
    meeting_id = uuid4()
    ingestion_service.ingest_batch(
        meeting_id, [_jpeg("1.jpg"), _jpeg("2.jpg"), _jpeg("3.jpg")]
    )

    report = ingestion_service.ingest_batch(meeting_id, [_jpeg("4.jpg")])

    (outcome,) = report.outcomes
    assert isinstance(outcome.error, PhotoLimitExceeded)
    assert len(photo_repository.list_photos(meeting_id)) == 3
    assert len(blob_store.objects) == 4
    notification = outcome.notification()
    assert notification.title == "Photo Limit Reached"
    assert notification.description == "Maximum 3 photos allowed per meeting."


def test_decode_failure_is_reported_and_batch_continues(
    ingestion_service, photo_repository
) -> None:
    meeting_id = uuid4()
    broken = SourceImage(file_name="broken.jpg", media_type="image/jpeg", data=b"xx")

    report = ingestion_service.ingest_batch(meeting_id, [broken, _jpeg("ok.jpg")])

    assert isinstance(report.outcomes[0].error, DecodeError)
    assert report.outcomes[1].ok
    assert len(report.failed) == 1


def test_upload_failure_creates_no_record(
    ingestion_service, blob_store, photo_repository
) -> None:
    meeting_id = uuid4()
    blob_store.fail_uploads = True

    report = ingestion_service.ingest_batch(meeting_id, [_jpeg("a.jpg")])

    assert isinstance(report.outcomes[0].error, UploadError)
    assert photo_repository.list_photos(meeting_id) == []
    notification = report.outcomes[0].notification()
    assert notification.title == "Upload Failed"
    assert notification.description == "Failed to upload a.jpg: Bucket not found"
    assert notification.variant is NotificationVariant.DESTRUCTIVE


def test_rerunning_the_same_file_creates_distinct_records(
    ingestion_service, blob_store
) -> None:
    meeting_id = uuid4()
    source = _jpeg("same.jpg")

    first = ingestion_service.ingest_batch(meeting_id, [source])
    second = ingestion_service.ingest_batch(meeting_id, [source])

    assert first.uploaded[0].id != second.uploaded[0].id
    assert first.uploaded[0].photo_url != second.uploaded[0].photo_url
    assert len(blob_store.objects) == 2


def test_on_finished_is_called_once_with_the_report(ingestion_service) -> None:
    seen: list[BatchReport] = []

    report = ingestion_service.ingest_batch(
        uuid4(), [_jpeg("a.jpg"), _jpeg("b.jpg")], on_finished=seen.append
    )

    assert seen == [report]


def test_empty_batch_still_finishes(ingestion_service) -> None:
    seen: list[BatchReport] = []

    report = ingestion_service.ingest_batch(uuid4(), [], on_finished=seen.append)

    assert report.outcomes == []
    assert seen == [report]


def test_recorder_maps_other_rejections_to_metadata_write_error() -> None:
    recorder = PhotoMetadataRecorder(
        InMemoryPhotoRepository(reject_with=RejectionReason.OTHER)
    )

    with pytest.raises(MetadataWriteError, match="insert refused"):
        recorder.record(uuid4(), "https://x/y/z.jpg", "z.jpg", 10)


def test_success_notification_reports_sizes(ingestion_service) -> None:
    report = ingestion_service.ingest_batch(uuid4(), [_jpeg("a.jpg")])

    outcome: PhotoOutcome = report.outcomes[0]
    notification = outcome.notification()
    assert notification.title == "Photo Uploaded"
    assert notification.variant is NotificationVariant.DEFAULT
    assert notification.description.startswith(
        "Photo compressed and uploaded successfully. Size reduced from "
    )


def test_success_notification_rounds_half_kilobytes_up() -> None:
    record = PhotoRecord(
        id=uuid4(),
        meeting_id=uuid4(),
        photo_url="https://x/y/z.jpg",
        file_name="z.jpg",
        file_size=2560,
        created_at=None,
    )
    outcome = PhotoOutcome(file_name="z.jpg", source_size=3584, record=record)

    assert outcome.notification().description == (
        "Photo compressed and uploaded successfully. "
        "Size reduced from 4KB to 3KB."
    )
