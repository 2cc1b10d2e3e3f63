"""Prometheus metrics for the data room.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

gate_attempts_total = Counter(
    "dataroom_gate_attempts_total",
    "Gate unlock attempts",
    ["outcome"]  # outcome: unlocked|rejected
)

gate_exits_total = Counter(
    "dataroom_gate_exits_total",
    "Explicit gate exits"
)

catalog_refresh_total = Counter(
    "dataroom_catalog_refresh_total",
    "Catalog refreshes against the object store",
    ["status"]  # status: success|error
)

documents_uploaded_total = Counter(
    "dataroom_documents_uploaded_total",
    "Document uploads",
    ["status"]  # status: success|rejected
)

documents_deleted_total = Counter(
    "dataroom_documents_deleted_total",
    "Document deletions",
    ["status"]  # status: success|rejected
)

upload_size_bytes = Histogram(
    "dataroom_upload_size_bytes",
    "Size of uploaded documents in bytes",
    buckets=[1024, 10240, 102400, 1048576, 10485760, 52428800, 104857600]
)

inquiries_total = Counter(
    "dataroom_inquiries_total",
    "Inquiry submissions",
    ["status"]  # status: success|rejected|error
)
