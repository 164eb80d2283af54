"""Workbook import domain service."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from condokit.config import ImporterConfig
from condokit.domain.cells import Row
from condokit.domain.detection import resolve_sheet_type
from condokit.domain.entities import Extraction, ParentLookup, SheetType, Unit
from condokit.domain.errors import ConfigError, collection_not_configured
from condokit.domain.extractors import extract
from condokit.domain.extractors.ledger import canonical_unit_code
from condokit.domain.properties import entity_label, to_properties
from condokit.store.base import RecordStore
from condokit.workbook import Workbook

logger = logging.getLogger(__name__)

ERROR_MESSAGE_LIMIT = 60

# Sheet outcomes
IMPORTED = "imported"
PREVIEWED = "previewed"
UNRECOGNIZED = "unrecognized"
MISSING = "missing"


@dataclass(frozen=True)
class WriteOutcome:
    """Result of writing one sheet's entities to the record store."""

    created: int = 0
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class SheetResult:
    """Outcome of importing one sheet."""

    sheet_name: str
    status: str
    sheet_type: Optional[SheetType] = None
    extraction: Optional[Extraction] = None
    count: int = 0
    errors: tuple[str, ...] = ()
    # Sheet names the workbook does have, set when the sheet is missing.
    available: tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportReport:
    """Outcome of importing a workbook."""

    sheets: tuple[SheetResult, ...] = ()
    dry_run: bool = False

    @property
    def total(self) -> int:
        """Entities written, or entities extracted in a dry run."""
        return sum(sheet.count for sheet in self.sheets)

    @property
    def error_count(self) -> int:
        return sum(len(sheet.errors) for sheet in self.sheets)


ExtractedCallback = Callable[[str, Extraction], None]
RecordCallback = Callable[[Any, Optional[str]], None]


class ImportService:
    """Service for importing spreadsheet workbooks into a record store."""

    def __init__(
        self,
        store: Optional[RecordStore],
        config: ImporterConfig,
        parents: Optional[ParentLookup] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize import service.

        Args:
            store: Record store to write to; may be None for dry runs
            config: Importer configuration
            parents: Optional parent record ids used to link ledger entries
                to units and movements to accounts. Defaults to the ids
                listed in the configuration.
            sleep: Pause function used to pace writes
        """
        self.store = store
        self.config = config
        self.sleep = sleep
        if parents is None:
            parents = ParentLookup(units=config.units, accounts=config.accounts)
        # Units created during the run are added to this copy only.
        self.parents = ParentLookup(
            units={canonical_unit_code(code): rid for code, rid in parents.units.items()},
            accounts=dict(parents.accounts),
        )

    def import_workbook(
        self,
        workbook: Workbook,
        sheet_name: Optional[str] = None,
        forced_type: Optional[SheetType] = None,
        dry_run: bool = False,
        on_extracted: Optional[ExtractedCallback] = None,
        on_record: Optional[RecordCallback] = None,
    ) -> ImportReport:
        """Import every sheet of a workbook, or a single named sheet.

        Args:
            workbook: Workbook to import
            sheet_name: Optional single sheet to import
            forced_type: Optional sheet type overriding detection
            dry_run: If True, extract and report without writing
            on_extracted: Called with each sheet's extraction before writing
            on_record: Called after each write with the entity and the
                error message, or None on success

        Returns:
            ImportReport with one result per processed sheet
        """
        sheet_names = [sheet_name] if sheet_name else workbook.sheet_names
        results = []
        for name in sheet_names:
            if not workbook.has_sheet(name):
                logger.debug("Sheet %r not in workbook", name)
                results.append(
                    SheetResult(
                        sheet_name=name,
                        status=MISSING,
                        available=tuple(workbook.sheet_names),
                    )
                )
                continue
            results.append(
                self.import_sheet(
                    name,
                    workbook.rows(name),
                    forced_type=forced_type,
                    dry_run=dry_run,
                    on_extracted=on_extracted,
                    on_record=on_record,
                )
            )
        return ImportReport(sheets=tuple(results), dry_run=dry_run)

    def import_sheet(
        self,
        sheet_name: str,
        rows: Sequence[Row],
        forced_type: Optional[SheetType] = None,
        dry_run: bool = False,
        on_extracted: Optional[ExtractedCallback] = None,
        on_record: Optional[RecordCallback] = None,
    ) -> SheetResult:
        """Detect, extract and (unless dry run) write one sheet.

        Raises:
            ConfigError: If entities must be written but no collection is
                configured for the sheet type
        """
        sheet_type = resolve_sheet_type(sheet_name, rows, forced_type)
        if sheet_type is None:
            logger.debug("Sheet %r not recognized", sheet_name)
            return SheetResult(sheet_name=sheet_name, status=UNRECOGNIZED)

        extraction = extract(sheet_type, rows)
        logger.debug("Sheet %r: %d %s entities", sheet_name, len(extraction), sheet_type.value)
        if on_extracted is not None:
            on_extracted(sheet_name, extraction)

        if dry_run or not extraction.entities:
            return SheetResult(
                sheet_name=sheet_name,
                status=PREVIEWED,
                sheet_type=sheet_type,
                extraction=extraction,
                count=len(extraction),
            )

        outcome = self.write_entities(extraction, on_record=on_record)
        return SheetResult(
            sheet_name=sheet_name,
            status=IMPORTED,
            sheet_type=sheet_type,
            extraction=extraction,
            count=outcome.created,
            errors=outcome.errors,
        )

    def write_entities(
        self, extraction: Extraction, on_record: Optional[RecordCallback] = None
    ) -> WriteOutcome:
        """Write extracted entities one at a time, pacing each request.

        A failed write is recorded and the remaining entities are still
        written.

        Args:
            extraction: Entities to write
            on_record: Optional per-entity callback

        Returns:
            WriteOutcome with the created count and error messages

        Raises:
            ConfigError: If no collection or store is configured
        """
        if self.store is None:
            raise ConfigError("No record store configured")
        collection_id = self.config.collection_id(extraction.sheet_type)
        if not collection_id:
            raise ConfigError(collection_not_configured(extraction.sheet_type.value))

        created = 0
        errors = []
        for entity in extraction.entities:
            self.sleep(self.config.request_delay)
            try:
                record_id = self.store.create_record(
                    collection_id, to_properties(entity, self.parents)
                )
            except Exception as e:
                message = f"{entity_label(entity)}: {str(e)[:ERROR_MESSAGE_LIMIT]}"
                logger.debug("Write failed for %s", entity_label(entity), exc_info=True)
                errors.append(message)
                if on_record is not None:
                    on_record(entity, message)
                continue

            created += 1
            if isinstance(entity, Unit):
                self.parents.units[canonical_unit_code(entity.unit_code)] = record_id
            if on_record is not None:
                on_record(entity, None)

        return WriteOutcome(created=created, errors=tuple(errors))
