"""
Result Parser for the FastSpring checkout sheet.
Turns the raw payload posted by the extraction script into license
records, or a typed failure.
"""
from typing import Any

from pydantic import ValidationError

from fscheckout.models.license import (
    ErrorKind,
    Failure,
    LicenseRecord,
    NoResult,
    ParseOutcome,
    Success,
)
from fscheckout.models.view_data import ViewData
from fscheckout.utils.logger import ComponentLogger


class ResultParser:
    """
    Decodes `viewdata` payloads.

    Tolerant of the *absence* of purchase data: not every completed
    page load is a finished purchase, so a payload without a
    `debtorName` is NoResult. Strict about *malformed* data: a payload
    that doesn't match the ViewData schema is a Failure.

    The parser keeps no state; parsing the same payload twice yields
    equal outcomes.
    """

    def __init__(self):
        self.logger = ComponentLogger("result_parser")

    def parse(self, payload: Any) -> ParseOutcome:
        """
        Parse a raw payload.

        Args:
            payload: Whatever crossed the content/host boundary

        Returns:
            NoResult, Success(records) or Failure(kind)
        """
        if not isinstance(payload, str):
            return self._fail(
                ErrorKind.INVALID_PAYLOAD_TYPE,
                f"payload is {type(payload).__name__}, not a string"
            )

        try:
            data = payload.encode("utf-8")
        except UnicodeEncodeError as e:
            return self._fail(ErrorKind.ENCODING_ERROR, str(e))

        try:
            view_data = ViewData.model_validate_json(data)
        except ValidationError as e:
            return self._fail(
                ErrorKind.MALFORMED_STRUCTURE,
                f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}"
            )

        if view_data.debtorName is None:
            self.logger.log_decision(
                decision="no_result",
                reason="debtorName absent, order not completed yet"
            )
            return NoResult()

        records = [
            LicenseRecord(sku="", name=view_data.debtorName, code=code)
            for code in view_data.license_codes()
        ]

        self.logger.log_action(
            "parse_payload",
            "completed",
            record_count=len(records)
        )
        return Success(records=records)

    def _fail(self, kind: ErrorKind, detail: str) -> Failure:
        self.logger.log_error(detail, error_type=kind.value)
        return Failure(kind=kind, detail=detail)
