"""Record types for NHN Cloud API results.

Field declaration order is the column order of table output and the key order
of JSON and YAML output. External names are the API's wire names.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import UnknownRecordType
from .shapes import external


@dataclass
class AuditEvent:
    """CloudTrail audit event."""

    event_id: str = external("eventId", default="")
    event_time: str = external("eventTime", default="")
    event_type: str = external("eventType", default="")
    event_source_type: str = external("eventSourceType", default="")
    member_id: str = external("memberId", default="")
    source_ip: str = external("sourceIp,omitempty", default="")
    product_id: str = external("productId,omitempty", default="")
    request: Optional[Dict[str, Any]] = external(visible=False, default=None)


@dataclass
class Registry:
    """Container registry (NCR)."""

    registry_id: int = external("id", default=0)
    name: str = external("name", default="")
    uri: str = external("uri", default="")
    is_public: bool = external("isPublic", default=False)
    status: str = external("status", default="")
    created_at: str = external("createdAt,omitempty", default="")


@dataclass
class NasVolume:
    """Network attached storage volume."""

    volume_id: str = external("id", default="")
    name: str = external("name", default="")
    size_gb: int = external("sizeGb", default=0)
    status: str = external("status", default="")
    protocol: str = external("protocol,omitempty", default="")
    interfaces: List[Dict[str, Any]] = external("interfaces,omitempty", default_factory=list)
    _project_id: str = field(default="", repr=False)


@dataclass
class DbInstance:
    """RDS database instance (MySQL, MariaDB or PostgreSQL)."""

    db_instance_id: str = external("dbInstanceId", default="")
    name: str = external("dbInstanceName", default="")
    status: str = external("dbInstanceStatus", default="")
    version: str = external("dbVersion", default="")
    flavor_id: str = external("dbFlavorId,omitempty", default="")
    storage_size: int = external("storageSize,omitempty", default=0)
    subnet_id: str = external("subnetId", visible=False, default="")


RECORD_TYPES = {
    "audit-event": AuditEvent,
    "registry": Registry,
    "nas-volume": NasVolume,
    "db-instance": DbInstance,
}


def get_record_type(name: str) -> type:
    """Look up a record type by its registered name.

    Raises:
        UnknownRecordType: If no record type is registered under name
    """
    try:
        return RECORD_TYPES[name]
    except KeyError:
        choices = ", ".join(sorted(RECORD_TYPES))
        raise UnknownRecordType(f"unknown record type {name!r} (choose from {choices})") from None
