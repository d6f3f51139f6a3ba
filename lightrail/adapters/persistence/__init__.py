from .local_file_snapshot_store import LocalFileSnapshotStore
from .local_stop_reference_repository import LocalStopReferenceRepository
from .s3_snapshot_store import S3SnapshotStore

__all__ = [
    "LocalFileSnapshotStore",
    "LocalStopReferenceRepository",
    "S3SnapshotStore",
]
