"""
Shared fixtures for report export tests
"""
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from report_exports.pdf_converter import PDFResult


@pytest.fixture
def generated_at():
    return datetime(2024, 1, 5, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def revenue_payload():
    return {
        "totalRevenue": 125000,
        "trends": [
            {"month": "Jan", "revenue": 1200, "change": 12.5, "orders": 10},
            {"month": "Feb", "revenue": 950.5, "change": -3, "orders": 8},
        ],
    }


@pytest.fixture
def orders_payload():
    return [
        {
            "_id": "65a1b2c3d4e5f6a7b8c9d0e1",
            "createdAt": "2024-01-05T10:00:00Z",
            "customer": {"name": "Rahim Uddin"},
            "status": "delivered",
            "totalAmount": 1234.5,
            "items": [{"sku": "A"}, {"sku": "B"}],
        },
        {
            "orderNumber": "ORD-1002",
            "createdAt": "2024-01-06T09:15:00Z",
            "buyer": {"name": "Karim Ahmed"},
            "status": "pending",
            "totalAmount": 300,
        },
    ]


@pytest.fixture
def customers_payload():
    return [
        {
            "name": "Nadia Islam",
            "email": "nadia@example.com",
            "phone": "+8801700000000",
            "totalOrders": 4,
            "totalSpent": 5200,
            "lastOrder": "2024-01-02T08:00:00Z",
            "status": "active",
        },
        {"name": "Tanvir Hasan", "totalOrders": 1, "totalSpent": 150},
    ]


@pytest.fixture
def overview_payload():
    return {
        "totalRevenue": 1234567.891,
        "totalOrders": 1520,
        "activeListings": 42,
        "retentionRate": 67.3,
    }


@pytest.fixture
def make_orders():
    """Build a list of minimal order records"""

    def build(count):
        return [
            {
                "orderNumber": f"ORD-{index:04d}",
                "createdAt": "2024-01-05T10:00:00Z",
                "customer": {"name": f"Customer {index}"},
                "status": "delivered",
                "totalAmount": 100 + index,
                "items": [],
            }
            for index in range(count)
        ]

    return build


@pytest.fixture
def make_converter_factory():
    """Build a converter factory whose converters return the given result"""

    def factory(result=None, side_effect=None):
        converter = AsyncMock()
        converter.__aenter__.return_value = converter
        converter.__aexit__.return_value = False
        if side_effect is not None:
            converter.convert_html_to_pdf.side_effect = side_effect
        else:
            converter.convert_html_to_pdf.return_value = result or PDFResult(
                success=True, pdf_data=b"%PDF-1.4 fake", file_size=13
            )
        return Mock(return_value=converter)

    return factory
