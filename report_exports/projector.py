"""
Column Projector

Maps one business data shape to flat, ordered, human-readable records ready
for tabular output. Each data type has a fixed column specification so the
same type always projects to the same column order.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from core.exceptions import ValidationError

from .formatters import format_currency, format_date, format_percentage
from .models import DEFAULT_STATUS, NOT_AVAILABLE, Column, ColumnSpec, ReportDataType

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _spec(*pairs) -> ColumnSpec:
    return ColumnSpec(tuple(Column(key, label) for key, label in pairs))


COLUMN_SPECS: Dict[ReportDataType, ColumnSpec] = {
    ReportDataType.REVENUE: _spec(
        ("period", "Period"),
        ("revenue", "Revenue"),
        ("change", "Change (%)"),
        ("orders", "Orders"),
    ),
    ReportDataType.ORDERS: _spec(
        ("orderNumber", "Order #"),
        ("date", "Date"),
        ("customer", "Customer"),
        ("status", "Status"),
        ("totalAmount", "Amount"),
        ("items", "Items"),
    ),
    ReportDataType.PRODUCTS: _spec(
        ("name", "Name"),
        ("category", "Category"),
        ("price", "Price"),
        ("stock", "Stock"),
        ("status", "Status"),
        ("revenue", "Revenue"),
        ("orders", "Orders"),
    ),
    ReportDataType.CUSTOMERS: _spec(
        ("name", "Name"),
        ("email", "Email"),
        ("phone", "Phone"),
        ("totalOrders", "Total Orders"),
        ("totalSpent", "Total Spent"),
        ("lastOrder", "Last Order"),
        ("status", "Status"),
    ),
    ReportDataType.SPENDING: _spec(
        ("category", "Category"),
        ("amount", "Amount"),
        ("percentage", "Percentage"),
        ("orders", "Orders"),
    ),
    ReportDataType.VENDORS: _spec(
        ("businessName", "Business Name"),
        ("category", "Category"),
        ("totalOrders", "Total Orders"),
        ("totalSpent", "Total Spent"),
        ("avgOrderValue", "Avg Order Value"),
        ("rating", "Rating"),
        ("status", "Status"),
    ),
}

# Payloads whose records live under a key of a wrapping object
NESTED_SEQUENCE_KEYS: Dict[ReportDataType, str] = {
    ReportDataType.REVENUE: "trends",
    ReportDataType.SPENDING: "byCategory",
}

LIST_TYPES = frozenset(
    {
        ReportDataType.ORDERS,
        ReportDataType.PRODUCTS,
        ReportDataType.CUSTOMERS,
        ReportDataType.VENDORS,
    }
)


def _first(record: Mapping[str, Any], *keys: str, default: Any = "") -> Any:
    """First present, non-empty value among keys"""
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def name_of(value: Any) -> Optional[str]:
    """Name of a nested party/category object, or the value itself when flat"""
    if isinstance(value, Mapping):
        return value.get("name") or None
    return value or None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def column_spec(data_type: ReportDataType) -> Optional[ColumnSpec]:
    """Fixed column specification, None for types without one"""
    return COLUMN_SPECS.get(data_type)


def validate_shape(data_type: ReportDataType, payload: Any) -> None:
    """
    Check the payload has the shape the data type projects from

    Raises:
        ValidationError: If the payload cannot be projected
    """
    if data_type == ReportDataType.OVERVIEW:
        if not isinstance(payload, Mapping):
            raise ValidationError("Overview export requires a single aggregate object", field="payload")
        return

    if data_type in NESTED_SEQUENCE_KEYS:
        key = NESTED_SEQUENCE_KEYS[data_type]
        if not isinstance(payload, Mapping) or not _is_sequence(payload.get(key)):
            raise ValidationError(
                f"{data_type.display_name} export requires a '{key}' sequence",
                field=key,
            )
        records = payload[key]
    elif data_type in LIST_TYPES:
        if not _is_sequence(payload):
            raise ValidationError(
                f"{data_type.display_name} export requires a sequence of records",
                field="payload",
            )
        records = payload
    else:
        return

    if len(records) == 0:
        raise ValidationError("No data to export", field="payload")
    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise ValidationError(
                f"Record {index} is not an object",
                field="payload",
                index=index,
            )


def _project_overview(payload: Mapping[str, Any]) -> List[Record]:
    return [dict(payload)]


def _project_revenue(payload: Mapping[str, Any]) -> List[Record]:
    rows = []
    for item in payload["trends"]:
        change = item.get("change")
        rows.append(
            {
                "period": _first(item, "month", "date", "period"),
                "revenue": format_currency(_first(item, "revenue", "amount", default=None)),
                "change": format_percentage(change) if change else "",
                "orders": _first(item, "orders"),
            }
        )
    return rows


def order_number(order: Mapping[str, Any]) -> str:
    """Human-readable order number, else the last six characters of the internal id"""
    if order.get("orderNumber"):
        return order["orderNumber"]
    identifier = order.get("_id") or order.get("id")
    if identifier:
        return str(identifier)[-6:]
    return ""


def order_customer(order: Mapping[str, Any]) -> str:
    """Customer name, falling back to the buyer, else N/A"""
    return name_of(order.get("customer")) or name_of(order.get("buyer")) or NOT_AVAILABLE


def _project_orders(payload: Sequence[Mapping[str, Any]]) -> List[Record]:
    rows = []
    for order in payload:
        items = order.get("items")
        rows.append(
            {
                "orderNumber": order_number(order),
                "date": format_date(order.get("createdAt")),
                "customer": order_customer(order),
                "status": order.get("status") or "",
                "totalAmount": format_currency(order.get("totalAmount")),
                "items": len(items) if _is_sequence(items) else 0,
            }
        )
    return rows


def _project_products(payload: Sequence[Mapping[str, Any]]) -> List[Record]:
    rows = []
    for item in payload:
        revenue = item.get("revenue")
        rows.append(
            {
                "name": _first(item, "name", "title"),
                "category": name_of(item.get("category")) or "",
                "price": format_currency(item.get("price")),
                "stock": _first(item, "stock", "quantity"),
                "status": item.get("status") or "",
                "revenue": format_currency(revenue) if revenue else NOT_AVAILABLE,
                "orders": _first(item, "orderCount", "orders", default=NOT_AVAILABLE),
            }
        )
    return rows


def _project_customers(payload: Sequence[Mapping[str, Any]]) -> List[Record]:
    rows = []
    for customer in payload:
        last_order = customer.get("lastOrder")
        rows.append(
            {
                "name": customer.get("name") or "",
                "email": customer.get("email") or NOT_AVAILABLE,
                "phone": customer.get("phone") or NOT_AVAILABLE,
                "totalOrders": customer.get("totalOrders") or 0,
                "totalSpent": format_currency(customer.get("totalSpent") or 0),
                "lastOrder": format_date(last_order) if last_order else NOT_AVAILABLE,
                "status": customer.get("status") or DEFAULT_STATUS,
            }
        )
    return rows


def _project_spending(payload: Mapping[str, Any]) -> List[Record]:
    rows = []
    for item in payload["byCategory"]:
        percentage = item.get("percentage")
        rows.append(
            {
                "category": item.get("category") or "",
                "amount": format_currency(item.get("amount")),
                "percentage": format_percentage(percentage) if percentage is not None else "",
                "orders": item.get("orders") or 0,
            }
        )
    return rows


def _project_vendors(payload: Sequence[Mapping[str, Any]]) -> List[Record]:
    rows = []
    for vendor in payload:
        rows.append(
            {
                "businessName": _first(vendor, "businessName", "name"),
                "category": name_of(vendor.get("category")) or NOT_AVAILABLE,
                "totalOrders": vendor.get("totalOrders") or 0,
                "totalSpent": format_currency(vendor.get("totalSpent") or 0),
                "avgOrderValue": format_currency(vendor.get("avgOrderValue") or 0),
                "rating": vendor.get("rating") or NOT_AVAILABLE,
                "status": vendor.get("status") or DEFAULT_STATUS,
            }
        )
    return rows


def _project_generic(payload: Any) -> Any:
    return payload


PROJECTIONS: Dict[ReportDataType, Callable[[Any], Any]] = {
    ReportDataType.OVERVIEW: _project_overview,
    ReportDataType.REVENUE: _project_revenue,
    ReportDataType.ORDERS: _project_orders,
    ReportDataType.PRODUCTS: _project_products,
    ReportDataType.CUSTOMERS: _project_customers,
    ReportDataType.SPENDING: _project_spending,
    ReportDataType.VENDORS: _project_vendors,
    ReportDataType.GENERIC: _project_generic,
}


def project(data_type: ReportDataType, payload: Any) -> List[Record]:
    """
    Project a business data payload into flat display records

    Args:
        data_type: Business data type driving the projection
        payload: Aggregate object or sequence of records; never mutated

    Returns:
        Records whose keys follow the data type's column specification.
        GENERIC payloads are returned unchanged.

    Raises:
        ValidationError: If the payload does not have the expected shape
    """
    validate_shape(data_type, payload)
    records = PROJECTIONS[data_type](payload)
    if isinstance(records, list):
        logger.debug(f"Projected {data_type.value} payload into {len(records)} records")
    return records


def columns_for(data_type: ReportDataType, records: List[Record]) -> List[str]:
    """Output column keys for projected records"""
    spec = column_spec(data_type)
    if spec is not None:
        return spec.keys
    if records and isinstance(records[0], Mapping):
        return list(records[0].keys())
    return []
