"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING, Any

from bulkupload.adapters.payload import parse_command, translate_resolution
from bulkupload.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyReferenceDataUnitOfWork,
    is_started,
    startup,
)
from bulkupload.domain.bulk_upload import resolve
from bulkupload.domain.ports import ReferenceDataUnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bulkupload.config import UploadFormatConfig
    from bulkupload.domain.model import (
        BulkUploadLegalEntityRelationshipCommand,
        ResolveBulkUploadLegalEntityRelationshipParameters,
    )

UnitOfWorkFactory = Callable[[], ReferenceDataUnitOfWork]


log = getLogger(__name__)


def resolve_legal_entity_relationship_upload(
    command: BulkUploadLegalEntityRelationshipCommand,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    format_config: UploadFormatConfig | None = None,
) -> ResolveBulkUploadLegalEntityRelationshipParameters:
    """Resolve an upload against the configured reference-data store."""

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyReferenceDataUnitOfWork

    with unit_of_work_factory() as uow:
        return resolve(command, repositories=uow.repositories, format_config=format_config)


def resolve_upload_payload(
    payload: Mapping[str, Any],
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    format_config: UploadFormatConfig | None = None,
) -> dict[str, Any]:
    """Validate a JSON-style command payload and return the review payload."""

    command = parse_command(payload)
    result = resolve_legal_entity_relationship_upload(
        command,
        unit_of_work_factory=unit_of_work_factory,
        format_config=format_config,
    )
    log.debug("Serialising %s resolved rows for review", len(result.resolved_rows))
    return translate_resolution(result).model_dump(mode="json", by_alias=True)
