"""
Report Template Builder

Composes a typed, renderer-independent ReportDocument from business data:
a header, a type-specific body and an attribution footer.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from core.config import settings
from core.exceptions import ValidationError

from .formatters import format_currency, format_date, format_datetime, format_percentage, format_thousands, number_text
from .interchange import serialize
from .models import (
    MAX_DOCUMENT_ORDERS,
    Metric,
    ReportDataType,
    ReportDocument,
    Section,
    SectionKind,
    TableContent,
)
from .projector import NESTED_SEQUENCE_KEYS, column_spec, order_customer, order_number

logger = logging.getLogger(__name__)

BodyBuilder = Callable[[Any], List[Section]]


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def report_id_for(generated_at: datetime) -> int:
    """Informative report identifier derived from generation time (epoch ms)"""
    return int(generated_at.timestamp() * 1000)


def validate_document_payload(data_type: ReportDataType, payload: Any) -> None:
    """
    Check the payload can be composed into a document for the data type

    Raises:
        ValidationError: If the payload shape does not match the data type
    """
    if data_type in (ReportDataType.OVERVIEW, ReportDataType.REVENUE, ReportDataType.SPENDING):
        if not isinstance(payload, Mapping):
            raise ValidationError(
                f"{data_type.display_name} report requires a single aggregate object",
                field="payload",
            )
        key = NESTED_SEQUENCE_KEYS.get(data_type)
        # A missing or empty series renders a heading-only table
        if key is not None and payload.get(key) is not None:
            series = payload[key]
            if not _is_sequence(series) or not all(isinstance(item, Mapping) for item in series):
                raise ValidationError(
                    f"{data_type.display_name} report requires '{key}' to be a sequence of objects",
                    field=key,
                )
    elif data_type == ReportDataType.ORDERS:
        if not _is_sequence(payload) or not all(isinstance(order, Mapping) for order in payload):
            raise ValidationError("Orders report requires a sequence of order records", field="payload")


def _overview_body(data: Mapping[str, Any]) -> List[Section]:
    metrics = [
        Metric("Total Revenue", format_currency(data.get("totalRevenue") or 0)),
        Metric("Total Orders", format_thousands(data.get("totalOrders") or 0)),
        Metric("Active Listings", format_thousands(data.get("activeListings") or 0)),
        Metric("Customer Retention", format_percentage(data.get("retentionRate") or 0, decimals=1)),
    ]
    return [Section("Dashboard Overview", SectionKind.METRIC_GRID, metrics)]


def _revenue_body(data: Mapping[str, Any]) -> List[Section]:
    table = TableContent(columns=column_spec(ReportDataType.REVENUE).labels)
    for item in data.get("trends") or []:
        table.rows.append(
            [
                str(item.get("month") or item.get("date") or item.get("period") or ""),
                format_currency(item.get("revenue") or item.get("amount")),
                format_percentage(item.get("change") or 0),
                number_text(item.get("orders") or 0),
            ]
        )
    return [Section("Revenue Analysis", SectionKind.TABLE, table)]


def _orders_body(orders: Sequence[Mapping[str, Any]]) -> List[Section]:
    # The document table drops the item count column
    table = TableContent(columns=column_spec(ReportDataType.ORDERS).labels[:5])
    for order in orders[:MAX_DOCUMENT_ORDERS]:
        table.rows.append(
            [
                str(order_number(order)),
                format_date(order.get("createdAt")),
                order_customer(order),
                str(order.get("status") or ""),
                format_currency(order.get("totalAmount")),
            ]
        )

    sections = [Section("Orders Summary", SectionKind.TABLE, table)]
    if len(orders) > MAX_DOCUMENT_ORDERS:
        sections.append(
            Section(
                "",
                SectionKind.NOTE,
                f"Showing first {MAX_DOCUMENT_ORDERS} orders out of {len(orders)} total orders.",
            )
        )
    return sections


def _spending_body(data: Mapping[str, Any]) -> List[Section]:
    table = TableContent(columns=column_spec(ReportDataType.SPENDING).labels)
    for item in data.get("byCategory") or []:
        table.rows.append(
            [
                str(item.get("category") or ""),
                format_currency(item.get("amount")),
                format_percentage(item.get("percentage") or 0),
                number_text(item.get("orders") or 0),
            ]
        )
    return [Section("Spending Analysis", SectionKind.TABLE, table)]


def _raw_dump_body(payload: Any) -> List[Section]:
    return [Section("Data Summary", SectionKind.RAW_DUMP, serialize(payload))]


BODY_BUILDERS: Dict[ReportDataType, BodyBuilder] = {
    ReportDataType.OVERVIEW: _overview_body,
    ReportDataType.REVENUE: _revenue_body,
    ReportDataType.ORDERS: _orders_body,
    ReportDataType.SPENDING: _spending_body,
    ReportDataType.PRODUCTS: _raw_dump_body,
    ReportDataType.CUSTOMERS: _raw_dump_body,
    ReportDataType.VENDORS: _raw_dump_body,
    ReportDataType.GENERIC: _raw_dump_body,
}


class ReportTemplateBuilder:
    """Builds ReportDocuments for every supported data type"""

    def __init__(self, brand: Optional[str] = None):
        self.brand = brand or settings.report_brand

    def attribution(self) -> str:
        return f"This report was generated automatically by {self.brand} Dashboard"

    def build(
        self,
        data_type: ReportDataType,
        payload: Any,
        role: str = "user",
        generated_at: Optional[datetime] = None,
    ) -> ReportDocument:
        """
        Compose a report document

        Args:
            data_type: Business data type selecting the body layout
            payload: Business data; never mutated
            role: Role of the requesting user, shown in the title and header
            generated_at: Generation timestamp (defaults to now, UTC)

        Returns:
            ReportDocument with header, body and footer sections

        Raises:
            ValidationError: If the payload shape does not match the data type
        """
        validate_document_payload(data_type, payload)

        generated_at = generated_at or datetime.now(timezone.utc)
        role_label = _capitalize(role)
        type_label = _capitalize(data_type.value)
        report_id = report_id_for(generated_at)
        title = f"{self.brand} - {role_label} {type_label} Report"

        header = Section(
            title,
            SectionKind.HEADER,
            [
                Metric("Generated", format_datetime(generated_at)),
                Metric("Report Type", f"{type_label} Analysis"),
                Metric("User Role", role_label),
            ],
        )
        footer = Section("", SectionKind.FOOTER, [self.attribution(), f"Report ID: {report_id}"])

        sections = [header, *BODY_BUILDERS[data_type](payload), footer]

        logger.debug(f"Built {data_type.value} report document with {len(sections)} sections")

        return ReportDocument(
            title=title,
            generated_at=generated_at,
            metadata={
                "role": role,
                "type": data_type.value,
                "report_id": report_id,
                "labels": {"role": role_label, "type": type_label},
            },
            sections=sections,
        )


def build_report_document(
    data_type: ReportDataType,
    payload: Any,
    role: str = "user",
    generated_at: Optional[datetime] = None,
) -> ReportDocument:
    """Convenience function using the default builder"""
    return ReportTemplateBuilder().build(data_type, payload, role=role, generated_at=generated_at)
